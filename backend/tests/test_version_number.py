import logging

import pytest

from backoffice.domain.versioning import Bump, VersionNumber, next_version_number


def test_minor_bump_increments_minor():
    assert VersionNumber(1, 0).next(Bump.MINOR) == VersionNumber(1, 1)


def test_major_bump_resets_minor():
    assert VersionNumber(1, 7).next(Bump.MAJOR) == VersionNumber(2, 0)


def test_none_bump_is_rejected():
    with pytest.raises(ValueError):
        VersionNumber(1, 0).next(Bump.NONE)


def test_ordering_is_numeric_not_lexical():
    assert VersionNumber(1, 10) > VersionNumber(1, 9)
    assert VersionNumber(2, 0) > VersionNumber(1, 99)
    assert sorted([VersionNumber(2, 1), VersionNumber(1, 10), VersionNumber(1, 2)]) == [
        VersionNumber(1, 2),
        VersionNumber(1, 10),
        VersionNumber(2, 1),
    ]


def test_parse_and_serialize():
    number = VersionNumber.parse("3.14")
    assert number == VersionNumber(3, 14)
    assert str(number) == "3.14"


@pytest.mark.parametrize("raw", ["", "1", "1.0.0", "v1.0", "a.b", "1.-1"])
def test_parse_rejects_malformed(raw):
    with pytest.raises(ValueError):
        VersionNumber.parse(raw)
    assert VersionNumber.parse_or_none(raw) is None


def test_next_version_starts_at_initial():
    assert next_version_number(None, Bump.MINOR) == VersionNumber(1, 0)


def test_next_version_follows_persisted_value():
    assert next_version_number("2.3", Bump.MINOR) == VersionNumber(2, 4)
    assert next_version_number("2.3", Bump.MAJOR) == VersionNumber(3, 0)


def test_corrupt_persisted_value_falls_back_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        assert next_version_number("draft-7", Bump.MAJOR) == VersionNumber(1, 0)

    assert "Corrupt version number" in caplog.text


def test_monotonic_over_mixed_bumps():
    history = [VersionNumber.initial()]
    for bump in [Bump.MINOR, Bump.MINOR, Bump.MAJOR, Bump.MINOR, Bump.MAJOR, Bump.MAJOR]:
        history.append(history[-1].next(bump))

    assert all(later > earlier for earlier, later in zip(history, history[1:]))
    assert str(history[-1]) == "4.0"
