import pytest

API = "/api"

LESSONS = [
    {"title": "Setup", "description": "Install the toolchain", "video_id": "vid-1"},
    {"title": "Borrowing", "document_ids": ["doc-1", "doc-2"]},
]


@pytest.fixture
def plan_of(client):
    def _create(author: dict, title: str = "Rust in a month", **fields) -> dict:
        payload = {"title": title, "skill": "rust", "skill_level": "BEGINNER", **fields}
        resp = client.post(f"{API}/learning-plans", json=payload, headers=author["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


class TestLearningPlans:
    def test_create_and_read_plan(self, client, register, plan_of):
        alice = register()
        plan = plan_of(alice, lessons=LESSONS, duration="4 weeks", thumbnail="https://img/1.png")

        assert plan["user_id"] == alice["user"]["id"]
        assert plan["duration"] == "4 weeks"
        assert [lesson["title"] for lesson in plan["lessons"]] == ["Setup", "Borrowing"]
        assert plan["lessons"][0]["document_ids"] == []
        assert plan["lessons"][1]["document_ids"] == ["doc-1", "doc-2"]

        resp = client.get(f"{API}/learning-plans/{plan['id']}", headers=alice["headers"])
        assert resp.status_code == 200
        assert resp.json()["title"] == "Rust in a month"
        assert resp.json()["lessons"] == plan["lessons"]

    def test_every_route_requires_token(self, client, register, plan_of):
        plan = plan_of(register())

        assert client.get(f"{API}/learning-plans").status_code == 401
        assert client.get(f"{API}/learning-plans/{plan['id']}").status_code == 401
        assert client.get(f"{API}/learning-plans/my-plans").status_code == 401
        assert client.post(f"{API}/learning-plans", json={"title": "anon"}).status_code == 401

    def test_create_rejects_empty_title(self, client, register):
        alice = register()

        resp = client.post(f"{API}/learning-plans", json={"title": ""}, headers=alice["headers"])

        assert resp.status_code == 422

    def test_unknown_plan_is_not_found(self, client, register):
        alice = register()

        resp = client.get(f"{API}/learning-plans/missing", headers=alice["headers"])

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Learning plan not found"

    def test_list_filters_by_skill_and_level(self, client, register, plan_of):
        alice, bob = register(), register()
        rust = plan_of(alice, skill="rust", skill_level="BEGINNER")
        rust_expert = plan_of(bob, skill="rust", skill_level="EXPERT")
        go = plan_of(bob, skill="go", skill_level="BEGINNER")

        def ids(**params):
            resp = client.get(f"{API}/learning-plans", params=params, headers=alice["headers"])
            assert resp.status_code == 200
            return {p["id"] for p in resp.json()}

        assert ids() == {rust["id"], rust_expert["id"], go["id"]}
        assert ids(skill="rust") == {rust["id"], rust_expert["id"]}
        assert ids(skill_level="BEGINNER") == {rust["id"], go["id"]}
        assert ids(skill="rust", skill_level="EXPERT") == {rust_expert["id"]}
        assert ids(skill="python") == set()

    def test_my_plans_lists_only_own(self, client, register, plan_of):
        alice, bob = register(), register()
        mine = plan_of(alice)
        plan_of(bob)

        resp = client.get(f"{API}/learning-plans/my-plans", headers=alice["headers"])

        assert resp.status_code == 200
        assert [p["id"] for p in resp.json()] == [mine["id"]]

    def test_owner_can_update(self, client, register, plan_of):
        alice = register()
        plan = plan_of(alice)

        resp = client.put(
            f"{API}/learning-plans/{plan['id']}",
            json={"title": "Rust in two months", "lessons": LESSONS[:1]},
            headers=alice["headers"],
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["title"] == "Rust in two months"
        assert [lesson["title"] for lesson in body["lessons"]] == ["Setup"]
        assert body["skill"] == "rust"
        assert body["user_id"] == alice["user"]["id"]

    def test_non_owner_cannot_update_or_delete(self, client, register, plan_of):
        alice, bob = register(), register()
        plan = plan_of(alice)

        put = client.put(
            f"{API}/learning-plans/{plan['id']}", json={"title": "Mine"}, headers=bob["headers"]
        )
        delete = client.delete(f"{API}/learning-plans/{plan['id']}", headers=bob["headers"])

        assert put.status_code == 403
        assert delete.status_code == 403
        resp = client.get(f"{API}/learning-plans/{plan['id']}", headers=alice["headers"])
        assert resp.json()["title"] == "Rust in a month"

    def test_owner_can_delete(self, client, register, plan_of):
        alice = register()
        plan = plan_of(alice)

        resp = client.delete(f"{API}/learning-plans/{plan['id']}", headers=alice["headers"])

        assert resp.status_code == 204
        missing = client.get(f"{API}/learning-plans/{plan['id']}", headers=alice["headers"])
        assert missing.status_code == 404
