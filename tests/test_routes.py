from tests.fakes import auth_header


NEW_PARTICIPANT = {
    "phone": "+62 812-345-678",
    "password": "secret123",
    "role": "participant",
    "full_name": "Siti Rahma",
    "intake": {"village": "Lhoknga", "age": "27"},
}


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestAuthentication:
    def test_missing_token(self, client):
        assert client.get("/api/v1/users").status_code == 401

    def test_unknown_token(self, client):
        response = client.get("/api/v1/users", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_identity_without_profile_is_forbidden(self, client, supabase, admin):
        supabase.tables["users"] = []
        response = client.get("/api/v1/auth/me", headers=auth_header(admin))
        assert response.status_code == 403

    def test_login_with_any_phone_format(self, client, admin):
        created = client.post("/api/v1/users", json=NEW_PARTICIPANT, headers=auth_header(admin))
        assert created.status_code == 201

        response = client.post("/api/v1/auth/login", json={"phone": "0812 345 678", "password": "secret123"})

        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == created.json()["user_id"]
        assert body["role"] == "participant"
        assert body["redirect_path"] == "/participant"

    def test_login_wrong_password(self, client, admin):
        client.post("/api/v1/users", json=NEW_PARTICIPANT, headers=auth_header(admin))

        response = client.post("/api/v1/auth/login", json={"phone": "0812345678", "password": "wrong-one"})

        assert response.status_code == 401

    def test_me_lists_permissions(self, client, volunteer):
        response = client.get("/api/v1/auth/me", headers=auth_header(volunteer))

        assert response.status_code == 200
        permissions = response.json()["permissions"]
        assert "users:create" in permissions
        assert "sessions:create" not in permissions


class TestUserRoutes:
    def test_volunteer_creates_participant(self, client, supabase, volunteer):
        response = client.post("/api/v1/users", json=NEW_PARTICIPANT, headers=auth_header(volunteer))

        assert response.status_code == 201
        user_id = response.json()["user_id"]
        [detail] = [p for p in supabase.rows("participants") if p["user_id"] == user_id]
        assert detail["village"] == "Lhoknga"

    def test_volunteer_cannot_create_admin(self, client, supabase, volunteer):
        before = len(supabase.identities)

        response = client.post(
            "/api/v1/users",
            json={**NEW_PARTICIPANT, "role": "admin"},
            headers=auth_header(volunteer)
        )

        assert response.status_code == 403
        assert len(supabase.identities) == before

    def test_participant_cannot_create_accounts(self, client, participant):
        response = client.post("/api/v1/users", json=NEW_PARTICIPANT, headers=auth_header(participant))
        assert response.status_code == 403

    def test_invalid_phone(self, client, admin):
        response = client.post(
            "/api/v1/users",
            json={**NEW_PARTICIPANT, "phone": "12345"},
            headers=auth_header(admin)
        )
        assert response.status_code == 400

    def test_duplicate_phone(self, client, admin):
        client.post("/api/v1/users", json=NEW_PARTICIPANT, headers=auth_header(admin))

        response = client.post(
            "/api/v1/users",
            json={**NEW_PARTICIPANT, "phone": "0812345678"},
            headers=auth_header(admin)
        )

        assert response.status_code == 409

    def test_detail_failure_leaves_nothing_behind(self, client, supabase, admin):
        supabase.fail("insert", "participants")

        response = client.post("/api/v1/users", json=NEW_PARTICIPANT, headers=auth_header(admin))

        assert response.status_code == 500
        assert [row["id"] for row in supabase.rows("users")] == [admin["id"]]
        assert list(supabase.identities) == [admin["id"]]

    def test_self_deletion_forbidden(self, client, participant):
        response = client.delete(f"/api/v1/users/{participant['id']}", headers=auth_header(participant))

        assert response.status_code == 403
        assert response.json()["detail"] == "Cannot delete your own account"

    def test_volunteer_deletes_participant(self, client, supabase, volunteer, participant):
        response = client.delete(f"/api/v1/users/{participant['id']}", headers=auth_header(volunteer))

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert participant["id"] not in supabase.identities

    def test_volunteer_cannot_delete_admin(self, client, admin, volunteer):
        response = client.delete(f"/api/v1/users/{admin['id']}", headers=auth_header(volunteer))
        assert response.status_code == 403

    def test_switch_language(self, client, supabase, participant):
        response = client.put(
            "/api/v1/users/me/language",
            json={"preferred_language": "id"},
            headers=auth_header(participant)
        )

        assert response.status_code == 200
        assert response.json()["preferred_language"] == "id"

    def test_list_users_by_role(self, client, admin, volunteer, participant):
        response = client.get("/api/v1/users", params={"role": "volunteer"}, headers=auth_header(admin))

        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [volunteer["id"]]


class TestProgramRoutes:
    def test_weekly_series_and_participant_attendance(self, client, admin, volunteer, participant):
        created = client.post(
            "/api/v1/sessions",
            json={"date": "2024-01-01", "time": "09:00", "recurrence": {"frequency": "weekly", "end_date": "2024-01-15"}},
            headers=auth_header(admin)
        )
        assert created.status_code == 201
        assert [s["date"] for s in created.json()] == ["2024-01-01", "2024-01-08", "2024-01-15"]
        lesson_id = created.json()[0]["id"]

        signup = client.post(f"/api/v1/sessions/{lesson_id}/signup", headers=auth_header(participant))
        assert signup.status_code == 201
        again = client.post(f"/api/v1/sessions/{lesson_id}/signup", headers=auth_header(participant))
        assert again.status_code == 409

        check_in = client.post(f"/api/v1/sessions/{lesson_id}/check-in", headers=auth_header(participant))
        assert check_in.json()["status"] == "self_reported"

        participant_id = check_in.json()["participant_id"]
        marked = client.post(
            f"/api/v1/sessions/{lesson_id}/attendance",
            json={"participant_id": participant_id, "status": "present"},
            headers=auth_header(volunteer)
        )
        assert marked.json()["validated_by_volunteer_id"] == volunteer["id"]

        history = client.get("/api/v1/sessions/attendance/me", headers=auth_header(participant))
        assert [h["status"] for h in history.json()] == ["present"]

    def test_volunteer_cannot_schedule(self, client, volunteer):
        response = client.post(
            "/api/v1/sessions",
            json={"date": "2024-01-01", "time": "09:00"},
            headers=auth_header(volunteer)
        )
        assert response.status_code == 403

    def test_participant_sets_own_photo_only(self, client, supabase, participant):
        own_id = supabase.participant_id_for(participant["id"])
        other_user = supabase.seed_account("participant", "6281100000099")
        other_id = supabase.participant_id_for(other_user)
        body = {"profile_photo_url": "https://cdn.example.org/p/1.jpg"}

        own = client.put(f"/api/v1/participants/{own_id}/photo", json=body, headers=auth_header(participant))
        other = client.put(f"/api/v1/participants/{other_id}/photo", json=body, headers=auth_header(participant))

        assert own.status_code == 200
        assert own.json()["profile_photo_url"] == body["profile_photo_url"]
        assert other.status_code == 403

    def test_volunteer_awards_skill(self, client, admin, volunteer, participant, supabase):
        level = client.post(
            "/api/v1/progress/levels",
            json={"name_en": "Beginner", "name_id": "Pemula"},
            headers=auth_header(admin)
        ).json()
        skill = client.post(
            "/api/v1/progress/skills",
            json={"name_en": "Floating", "name_id": "Mengapung", "level_id": level["id"]},
            headers=auth_header(admin)
        ).json()
        participant_id = supabase.participant_id_for(participant["id"])

        awarded = client.post(
            f"/api/v1/progress/participants/{participant_id}/skills",
            json={"skill_id": skill["id"]},
            headers=auth_header(volunteer)
        )
        assert awarded.status_code == 201

        mine = client.get("/api/v1/progress/me", headers=auth_header(participant))
        assert [r["skill_id"] for r in mine.json()["skills"]] == [skill["id"]]
