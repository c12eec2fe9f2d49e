from backoffice.domain.exceptions import InvariantViolation
from .document import assert_title


def assert_version(version, document):
    if version.document_id != document.id:
        raise InvariantViolation("Version must belong to the document it is attached to.")

    assert_title(version.title)

    if not version.checksum:
        raise InvariantViolation("Version must carry a checksum.")
