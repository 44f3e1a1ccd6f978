from conftest import auth_headers, make_user

from portfolio_admin.models import Profile, User


def _stored_files(client):
    root = client.app.state.file_store.root
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


def test_update_requires_caller(test_app_client):
    client, session_factory = test_app_client

    resp = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic=("me.png", b"png", "image/png")),
    )

    assert resp.status_code == 401
    assert resp.json()["message"] == "Unauthorized: Missing user ID"
    assert _stored_files(client) == []


def test_update_rejects_invalid_token(test_app_client):
    client, _ = test_app_client
    resp = client.post(
        "/update-profile",
        data={"name": "Ada"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert resp.status_code == 401


def test_update_requires_name_and_writes_nothing(owner):
    client, user_id, headers, session_factory = owner

    for data in ({}, {"name": ""}, {"name": "   "}):
        resp = client.post(
            "/update-profile",
            data=data,
            files=dict(resumePdf=("cv.pdf", b"%PDF", "application/pdf")),
            headers=headers,
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Name is required"

    assert _stored_files(client) == []
    session = session_factory()
    assert session.query(Profile).count() == 0
    assert session.get(User, user_id).name == "Ada Lovelace"
    session.close()


def test_create_profile_with_uploads(owner):
    client, user_id, headers, session_factory = owner

    resp = client.post(
        "/update-profile",
        data={"name": "Ada", "aboutText": "Analyst", "address": "London", "experience": "10 years"},
        files=dict(
            profilePic=("me.png", b"png-1", "image/png"),
            resumePdf=("my cv.pdf", b"%PDF-1", "application/pdf"),
            video=("intro.mp4", b"mp4", "video/mp4"),
        ),
        headers=headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Profile saved successfully"
    data = body["data"]
    assert data["ownerId"] == user_id
    assert data["name"] == "Ada"
    assert data["aboutText"] == "Analyst"
    assert data["profilePic"].startswith("/uploads/images/")
    assert data["resumePdf"].startswith("/uploads/pdfs/") and data["resumePdf"].endswith("-my_cv.pdf")
    assert data["video"].startswith("/uploads/videos/")
    assert data["profilePic2"] is None

    store = client.app.state.file_store
    assert store.resolve(data["resumePdf"]).read_bytes() == b"%PDF-1"

    session = session_factory()
    user = session.get(User, user_id)
    assert user.name == "Ada"
    assert user.address == "London"
    assert user.experience_summary == "10 years"
    assert user.phone_number == "555-0100"   # not submitted, kept
    session.close()


def test_update_without_files_preserves_paths(owner):
    client, _, headers, _ = owner
    first = client.post(
        "/update-profile",
        data={"name": "Ada", "aboutText": "Analyst"},
        files=dict(profilePic=("me.png", b"png", "image/png"), video=("v.mp4", b"mp4", "video/mp4")),
        headers=headers,
    ).json()["data"]

    second = client.post("/update-profile", data={"name": "Ada L."}, headers=headers)

    assert second.status_code == 200
    data = second.json()["data"]
    assert data["name"] == "Ada L."
    assert data["profilePic"] == first["profilePic"]
    assert data["video"] == first["video"]
    assert data["aboutText"] == "Analyst"
    assert data["id"] == first["id"]
    assert len(_stored_files(client)) == 2


def test_new_upload_reclaims_previous_file(owner):
    client, _, headers, _ = owner
    store = client.app.state.file_store
    first = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic=("old.png", b"old", "image/png"), resumePdf=("cv.pdf", b"%PDF", "application/pdf")),
        headers=headers,
    ).json()["data"]

    resp = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic=("new.png", b"new", "image/png")),
        headers=headers,
    )

    data = resp.json()["data"]
    assert resp.status_code == 200
    assert data["profilePic"] != first["profilePic"]
    assert data["profilePic"].endswith("-new.png")
    assert not store.resolve(first["profilePic"]).exists()
    assert store.resolve(data["profilePic"]).read_bytes() == b"new"
    # untouched slot keeps its file
    assert data["resumePdf"] == first["resumePdf"]
    assert store.resolve(first["resumePdf"]).exists()


def test_reupload_when_old_file_already_gone(owner):
    client, _, headers, _ = owner
    store = client.app.state.file_store
    first = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic=("old.png", b"old", "image/png")),
        headers=headers,
    ).json()["data"]
    store.resolve(first["profilePic"]).unlink()

    resp = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic=("new.png", b"new", "image/png")),
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["profilePic"].endswith("-new.png")


def test_slot_file_is_bucketed_by_media_type(owner):
    client, _, headers, _ = owner
    resp = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic2=("scan.pdf", b"%PDF", "application/pdf"), video=("clip.bin", b"x", "application/octet-stream")),
        headers=headers,
    )
    data = resp.json()["data"]
    assert data["profilePic2"].startswith("/uploads/pdfs/")
    assert data["video"].startswith("/uploads/others/")


def test_profile_saved_without_user_record(test_app_client):
    client, session_factory = test_app_client
    resp = client.post("/update-profile", data={"name": "Ghost"}, headers=auth_headers(404))

    assert resp.status_code == 200
    assert resp.json()["data"]["ownerId"] == 404


def test_uploaded_file_is_served(owner):
    client, _, headers, _ = owner
    data = client.post(
        "/update-profile",
        data={"name": "Ada"},
        files=dict(profilePic=("me.png", b"png-bytes", "image/png")),
        headers=headers,
    ).json()["data"]

    resp = client.get(data["profilePic"])
    assert resp.status_code == 200
    assert resp.content == b"png-bytes"


def test_get_profile_not_found(owner):
    client, _, headers, _ = owner
    resp = client.get("/get-profile", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Profile or user not found"


def test_get_profile_with_no_users_is_not_found(test_app_client):
    client, _ = test_app_client
    assert client.get("/get-profile").status_code == 404


def test_get_profile_merges_user_fields_with_empty_defaults(owner):
    client, user_id, headers, _ = owner
    client.post(
        "/update-profile",
        data={"name": "Ada", "phoneNumber": "555-0199"},
        files=dict(profilePic=("me.png", b"png", "image/png")),
        headers=headers,
    )

    resp = client.get("/get-profile", headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Profile data fetched successfully"
    data = body["data"]
    assert data["name"] == "Ada"
    assert data["email"] == "owner@example.com"
    assert data["phoneNumber"] == "555-0199"
    assert data["degree"] == "BSc"
    assert data["profilePic"].startswith("/uploads/images/")
    assert data["profilePic2"] == ""
    assert data["aboutText"] == ""
    assert data["birthday"] == ""
    assert data["experience"] == ""


def test_get_profile_falls_back_to_first_user_when_anonymous(owner):
    client, _, headers, session_factory = owner
    other_id = make_user(session_factory, email="other@example.com")
    client.post("/update-profile", data={"name": "Ada"}, headers=headers)
    client.post("/update-profile", data={"name": "Other"}, headers=auth_headers(other_id))

    resp = client.get("/get-profile")

    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Ada"
    assert resp.json()["data"]["email"] == "owner@example.com"
