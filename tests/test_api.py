from tests.conftest import auth_header, member_data


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_register_login_me(client):
    r = client.post("/auth/register", json=member_data())
    assert r.status_code == 201
    assert r.get_json()["data"]["points"] == 100

    r = client.post("/auth/login", json={"email": "asha@example.com", "password": "secret"})
    assert r.status_code == 200
    token = r.get_json()["access_token"]

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.get_json()["user"]["email"] == "asha@example.com"


def test_login_failure_is_401(client, member):
    r = client.post("/auth/login", json={"email": "asha@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.get_json()["error"] == "AuthenticationError"


def test_register_validation_error_is_400(client):
    data = member_data()
    data.pop("admission_id")
    r = client.post("/auth/register", json=data)
    assert r.status_code == 400
    assert r.get_json()["success"] is False


def test_create_book_requires_admin(client, member, admin):
    payload = {"title": "Deep Work", "author": "Cal Newport", "category": "Productivity", "price": 300}

    r = client.post("/books/", json=payload, headers=auth_header(member))
    assert r.status_code == 403

    r = client.post("/books/", json=payload, headers=auth_header(admin))
    assert r.status_code == 201
    assert r.get_json()["data"]["available_copies"] == 3


def test_list_and_get_books(client, book):
    r = client.get("/books/")
    assert [b["title"] for b in r.get_json()["data"]] == ["Atomic Habits"]
    assert client.get(f"/books/{book.id}").status_code == 200
    assert client.get("/books/999").status_code == 404


def test_borrow_and_return_flow(client, book, member, admin, clock):
    r = client.post("/transactions/borrow", json={"book_id": book.id}, headers=auth_header(member))
    assert r.status_code == 201
    tx = r.get_json()["data"]
    assert tx["status"] == "Active"
    assert tx["borrower_id"] == member.id
    assert tx["due_date"] == "2025-01-31T10:00:00"

    r = client.post("/transactions/borrow", json={"book_id": book.id}, headers=auth_header(member))
    assert r.status_code == 409
    assert r.get_json()["error"] == "EligibilityError"

    clock.advance(days=31)
    r = client.get(f"/transactions/{tx['id']}/fine", headers=auth_header(admin))
    assert r.get_json()["data"]["fine"] == 1050

    r = client.post(f"/transactions/{tx['id']}/return", json={"damage_type": "None"},
                    headers=auth_header(member))
    assert r.status_code == 200
    body = r.get_json()
    assert body["fine"] == 1050
    assert body["data"]["status"] == "Missing"

    r = client.post(f"/transactions/{tx['id']}/return", json={}, headers=auth_header(admin))
    assert r.status_code == 409
    assert r.get_json()["error"] == "InvalidStateError"


def test_member_cannot_borrow_for_someone_else(client, book, member, make_member):
    other = make_member()
    r = client.post("/transactions/borrow", json={"book_id": book.id, "borrower_id": other.id},
                    headers=auth_header(member))
    assert r.status_code == 201
    assert r.get_json()["data"]["borrower_id"] == member.id


def test_admin_issues_group_borrow(client, book, member, make_member, admin):
    others = [make_member().id, make_member().id]
    r = client.post("/transactions/borrow", json={
        "book_id": book.id,
        "borrower_id": member.id,
        "borrowing_type": "Group",
        "group_members": others,
    }, headers=auth_header(admin))
    assert r.status_code == 201
    assert r.get_json()["data"]["group_members"] == others


def test_group_too_small_is_400(client, book, member, make_member, admin):
    r = client.post("/transactions/borrow", json={
        "book_id": book.id,
        "borrower_id": member.id,
        "borrowing_type": "Group",
        "group_members": [make_member().id],
    }, headers=auth_header(admin))
    assert r.status_code == 400
    assert "3-6 members" in r.get_json()["message"]


def test_member_cannot_return_others_transaction(client, book, member, make_member):
    other = make_member()
    r = client.post("/transactions/borrow", json={"book_id": book.id}, headers=auth_header(other))
    tx_id = r.get_json()["data"]["id"]

    r = client.post(f"/transactions/{tx_id}/return", json={}, headers=auth_header(member))
    assert r.status_code == 403


def test_admin_views_and_stats(client, book, member, admin, clock):
    client.post("/transactions/borrow", json={"book_id": book.id}, headers=auth_header(member))
    clock.advance(days=45)

    active = client.get("/transactions/active", headers=auth_header(admin)).get_json()["data"]
    overdue = client.get("/transactions/overdue", headers=auth_header(admin)).get_json()["data"]
    assert len(active) == 1
    assert len(overdue) == 1

    stats = client.get("/reports/stats", headers=auth_header(admin)).get_json()["data"]
    assert stats["borrowed_copies"] == 1
    assert stats["overdue_borrowings"] == 1

    assert client.get("/reports/stats", headers=auth_header(member)).status_code == 403


def test_member_profile_with_history(client, book, member, make_member):
    client.post("/transactions/borrow", json={"book_id": book.id}, headers=auth_header(member))

    data = client.get(f"/members/{member.id}", headers=auth_header(member)).get_json()["data"]
    assert len(data["active_transactions"]) == 1
    assert data["previous_transactions"] == []

    other = make_member()
    assert client.get(f"/members/{other.id}", headers=auth_header(member)).status_code == 403


def test_feedback_endpoints(client, member, make_member, book):
    r = client.post("/feedback/", json={"title": "Nice", "comment": "Good", "rating": 4, "book_id": book.id},
                    headers=auth_header(member))
    assert r.status_code == 201
    fb_id = r.get_json()["data"]["id"]

    assert len(client.get(f"/feedback/?book_id={book.id}").get_json()["data"]) == 1

    stranger = make_member()
    assert client.delete(f"/feedback/{fb_id}", headers=auth_header(stranger)).status_code == 403
    assert client.delete(f"/feedback/{fb_id}", headers=auth_header(member)).status_code == 200


def test_requires_token(client, book):
    assert client.post("/transactions/borrow", json={"book_id": book.id}).status_code == 401


def test_admin_route_forbidden_body_names_role(client, member):
    r = client.get("/reports/stats", headers=auth_header(member))
    assert r.status_code == 403
    body = r.get_json()
    assert body["success"] is False
    assert body["error"] == "Forbidden"
    assert "admin" in body["message"]
