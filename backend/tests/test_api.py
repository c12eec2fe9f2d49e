import json

import pytest


API = "/api/v1"


@pytest.fixture
def created(client, editor_headers):
    response = client.post(
        f"{API}/documents",
        json={"title": "Code of Conduct", "content": "Be kind."},
        headers=editor_headers,
    )
    assert response.status_code == 201
    return response.get_json()


def put(client, headers, document_id, **body):
    return client.put(f"{API}/documents/{document_id}", json=body, headers=headers)


def test_health_is_public(client):
    response = client.get(f"{API}/health")

    assert response.status_code == 200


def test_create_returns_draft_at_one_zero(created):
    assert created["status"] == "draft"
    assert created["slug"] == "code-of-conduct"
    assert created["version"] == "1.0"
    assert created["current_version"]["change_log"] == "Initial version"
    assert created["created_by"] == "editor-1"


def test_create_requires_title(client, editor_headers):
    response = client.post(f"{API}/documents", json={"content": "x"}, headers=editor_headers)

    assert response.status_code == 400


def test_create_requires_token(client):
    response = client.post(f"{API}/documents", json={"title": "No token"})

    assert response.status_code == 401


def test_create_forbidden_for_other_roles(client, viewer_headers):
    response = client.post(f"{API}/documents", json={"title": "Nope"}, headers=viewer_headers)

    assert response.status_code == 403


def test_duplicate_explicit_slug_conflicts(client, editor_headers, created):
    response = client.post(
        f"{API}/documents",
        json={"title": "Another", "slug": "code-of-conduct"},
        headers=editor_headers,
    )

    assert response.status_code == 409
    assert response.get_json()["error"] == "SlugConflictError"


def test_get_document_includes_stats(client, editor_headers, created):
    response = client.get(f"{API}/documents/{created['id']}", headers=editor_headers)

    body = response.get_json()
    assert response.status_code == 200
    assert body["stats"]["total_versions"] == 1
    assert body["stats"]["current_version"] == "1.0"


def test_unknown_document_is_404(client, editor_headers):
    response = client.get(f"{API}/documents/missing", headers=editor_headers)

    assert response.status_code == 404
    assert response.get_json()["error"] == "DocumentNotFoundError"


def test_update_appends_version(client, editor_headers, created):
    response = put(
        client, editor_headers, created["id"],
        content="Be kind and patient.", bump="minor", change_log="expand",
    )

    body = response.get_json()
    assert response.status_code == 200
    assert body["versioned"] is True
    assert body["version"]["version"] == "1.1"
    assert body["document"]["content"] == "Be kind and patient."


def test_update_without_change_log_is_422(client, editor_headers, created):
    response = put(client, editor_headers, created["id"], content="x", bump="major")

    assert response.status_code == 422
    assert response.get_json()["error"] == "MissingChangeLogError"


def test_update_with_bad_bump_is_400(client, editor_headers, created):
    response = put(client, editor_headers, created["id"], content="x", bump="patch", change_log="x")

    assert response.status_code == 400


def test_update_unversioned(client, editor_headers, created):
    response = put(client, editor_headers, created["id"], content="Be kind!", bump="none")

    body = response.get_json()
    assert body["versioned"] is False
    assert body["version"] is None
    assert body["document"]["version"] == "1.0"


def test_stale_update_conflicts(client, editor_headers, created):
    response = client.put(
        f"{API}/documents/{created['id']}",
        json={"content": "late", "bump": "minor", "change_log": "late edit"},
        headers={**editor_headers, "If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"},
    )

    assert response.status_code == 409


def test_malformed_lock_header_is_400(client, editor_headers, created):
    response = client.put(
        f"{API}/documents/{created['id']}",
        json={"content": "x", "bump": "minor", "change_log": "x"},
        headers={**editor_headers, "If-Unmodified-Since": "not a date"},
    )

    assert response.status_code == 400


def test_illegal_transition_reports_states(client, editor_headers, created):
    client.post(f"{API}/documents/{created['id']}/archive", headers=editor_headers)

    response = client.post(f"{API}/documents/{created['id']}/publish", headers=editor_headers)

    body = response.get_json()
    assert response.status_code == 409
    assert body["error"] == "InvalidTransitionError"
    assert body["from"] == "archived"
    assert body["to"] == "published"


def test_review_then_publish(client, editor_headers, created):
    review = client.post(f"{API}/documents/{created['id']}/submit-for-review", headers=editor_headers)
    publish = client.post(f"{API}/documents/{created['id']}/publish", headers=editor_headers)

    assert review.get_json()["status"] == "review"
    assert publish.get_json()["status"] == "published"
    assert publish.get_json()["published_at"] is not None


def test_duplicate(client, editor_headers, created):
    response = client.post(f"{API}/documents/{created['id']}/duplicate", headers=editor_headers)

    body = response.get_json()
    assert response.status_code == 201
    assert body["slug"] == "code-of-conduct-copy"
    assert body["version"] == "1.0"


def test_delete_requires_admin(client, editor_headers, admin_headers, created):
    assert client.delete(f"{API}/documents/{created['id']}", headers=editor_headers).status_code == 403

    response = client.delete(f"{API}/documents/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"{API}/documents/{created['id']}", headers=admin_headers).status_code == 404


def test_version_history_and_rollback(client, editor_headers, created):
    put(client, editor_headers, created["id"], content="Second", bump="minor", change_log="second")

    versions = client.get(f"{API}/documents/{created['id']}/versions", headers=editor_headers).get_json()
    assert [v["version"] for v in versions] == ["1.0", "1.1"]
    assert [v["is_current"] for v in versions] == [False, True]

    first = client.get(
        f"{API}/documents/{created['id']}/versions/{versions[0]['id']}",
        headers=editor_headers,
    ).get_json()
    assert first["content"] == "Be kind."

    response = client.post(
        f"{API}/documents/{created['id']}/versions/{versions[0]['id']}/rollback",
        headers=editor_headers,
    )

    body = response.get_json()
    assert response.status_code == 201
    assert body["version"]["version"] == "1.2"
    assert body["version"]["change_log"] == "Restored to version 1.0"


def test_delete_current_version_is_409(client, admin_headers, created):
    current_id = created["current_version"]["id"]

    response = client.delete(
        f"{API}/documents/{created['id']}/versions/{current_id}",
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.get_json()["error"] == "CurrentVersionProtectedError"


def test_compare(client, editor_headers, created):
    new_id = put(
        client, editor_headers, created["id"],
        content="Be brave.", bump="minor", change_log="tone",
    ).get_json()["version"]["id"]
    old_id = created["current_version"]["id"]

    response = client.get(
        f"{API}/documents/{created['id']}/versions/compare/{new_id}/{old_id}?field=change_log",
        headers=editor_headers,
    )

    body = response.get_json()
    assert response.status_code == 200
    assert body["older"]["version"] == "1.0"
    assert body["newer"]["version"] == "1.1"
    assert [d["field"] for d in body["field_diffs"] if d["changed"]] == ["content", "change_log"]


def test_compare_rejects_unknown_field(client, editor_headers, created):
    version_id = created["current_version"]["id"]

    response = client.get(
        f"{API}/documents/{created['id']}/versions/compare/{version_id}/{version_id}?field=secret",
        headers=editor_headers,
    )

    assert response.status_code == 400


def test_export_is_a_json_attachment(client, editor_headers, created):
    response = client.get(f"{API}/documents/{created['id']}/versions/export", headers=editor_headers)

    assert response.status_code == 200
    disposition = response.headers["Content-Disposition"]
    assert disposition.startswith('attachment; filename="versions-code-of-conduct-')
    assert disposition.endswith('.json"')

    data = json.loads(response.get_data(as_text=True))
    assert data["exported_by"] == "editor-1"
    assert data["versions"][0]["version"] == "1.0"
    assert data["versions"][0]["created_by"] == "editor-1"


def test_integrity_endpoints(client, editor_headers, created):
    current = created["current_version"]

    report = client.get(f"{API}/documents/{created['id']}/integrity", headers=editor_headers).get_json()
    assert report["valid"] is True

    verify = client.post(
        f"{API}/documents/{created['id']}/versions/{current['id']}/verify",
        json={"checksum": "0" * 64},
        headers=editor_headers,
    )
    assert verify.status_code == 422
    assert verify.get_json()["expected"] == "0" * 64

    matches = client.get(f"{API}/versions?checksum={current['checksum']}", headers=editor_headers)
    assert [v["id"] for v in matches.get_json()] == [current["id"]]

    assert client.get(f"{API}/versions?checksum=", headers=editor_headers).status_code == 400


def test_audit_trail_is_admin_only(client, editor_headers, admin_headers, created):
    put(client, editor_headers, created["id"], content="Second", bump="minor", change_log="second")

    assert client.get(f"{API}/documents/{created['id']}/audit", headers=editor_headers).status_code == 403

    response = client.get(f"{API}/documents/{created['id']}/audit?limit=1", headers=admin_headers)

    body = response.get_json()
    assert response.status_code == 200
    assert len(body["items"]) == 1
    assert body["pagination"]["has_more"] is True

    following = client.get(
        f"{API}/documents/{created['id']}/audit",
        query_string={"limit": 1, "cursor": body["pagination"]["next_cursor"]},
        headers=admin_headers,
    ).get_json()
    assert len(following["items"]) == 1
    assert following["items"][0]["id"] != body["items"][0]["id"]

    filtered = client.get(
        f"{API}/documents/{created['id']}/audit?action=document.update",
        headers=admin_headers,
    ).get_json()
    assert [item["action"] for item in filtered["items"]] == ["document.update"]


def test_verify_with_non_hex_checksum_is_422(client, editor_headers, created):
    current = created["current_version"]

    response = client.post(
        f"{API}/documents/{created['id']}/versions/{current['id']}/verify",
        json={"checksum": "ü"},
        headers=editor_headers,
    )

    assert response.status_code == 422
    assert response.get_json()["error"] == "IntegrityMismatchError"
    assert response.get_json()["actual"] == current["checksum"]


def test_unchanged_update_returns_current_version(app, client, editor_headers, created):
    app.config["SKIP_UNCHANGED_VERSIONS"] = True

    response = put(client, editor_headers, created["id"], content="Be kind.", bump="minor", change_log="noop")

    body = response.get_json()
    assert response.status_code == 200
    assert body["versioned"] is True
    assert body["created"] is False
    assert body["version"]["id"] == created["current_version"]["id"]


def test_version_lookups(client, editor_headers, admin_headers, created):
    client.post(f"{API}/documents", json={"title": "Dress Code", "content": "Smart."}, headers=admin_headers)

    recent = client.get(f"{API}/versions?limit=1", headers=editor_headers).get_json()
    assert [v["title"] for v in recent] == ["Dress Code"]

    mine = client.get(f"{API}/versions?created_by=editor-1", headers=editor_headers).get_json()
    assert [v["title"] for v in mine] == ["Code of Conduct"]

    ranged = client.get(f"{API}/versions?from=2000-01-01T00:00:00Z", headers=editor_headers).get_json()
    assert len(ranged) == 2

    empty = client.get(f"{API}/versions?to=2000-01-01", headers=editor_headers).get_json()
    assert empty == []

    assert client.get(f"{API}/versions?from=someday", headers=editor_headers).status_code == 400
    assert client.get(
        f"{API}/versions?from=2030-01-01&to=2020-01-01", headers=editor_headers
    ).status_code == 400
