API = "/api"


def _post(client, author, title="Learning Rust") -> dict:
    return client.post(f"{API}/posts", json={"title": title}, headers=author["headers"]).json()


def test_notifications_require_token(client):
    assert client.get(f"{API}/notifications").status_code == 401
    assert client.get(f"{API}/notifications/unread-count").status_code == 401


def test_comment_and_like_notify_owner(client, register):
    alice, bob = register(), register()
    post = _post(client, alice)
    client.post(f"{API}/posts/{post['id']}/comments", json={"content": "hi"}, headers=bob["headers"])
    client.post(f"{API}/posts/{post['id']}/likes", headers=bob["headers"])

    resp = client.get(f"{API}/notifications", headers=alice["headers"])

    assert resp.status_code == 200
    assert [n["type"] for n in resp.json()] == ["LIKE", "COMMENT"]
    assert all(n["action_user_id"] == bob["user"]["id"] for n in resp.json())
    assert client.get(f"{API}/notifications", headers=bob["headers"]).json() == []


def test_repeated_like_notifies_once(client, register):
    alice, bob = register(), register()
    post = _post(client, alice)
    url = f"{API}/posts/{post['id']}/likes"

    client.post(url, headers=bob["headers"])
    client.post(url, headers=bob["headers"])

    count = client.get(f"{API}/notifications/unread-count", headers=alice["headers"]).json()
    assert count == {"unread_count": 1}


def test_own_activity_does_not_notify(client, register):
    alice = register()
    post = _post(client, alice)
    client.post(f"{API}/posts/{post['id']}/comments", json={"content": "me"}, headers=alice["headers"])
    client.post(f"{API}/posts/{post['id']}/likes", headers=alice["headers"])

    assert client.get(f"{API}/notifications", headers=alice["headers"]).json() == []


def test_mark_read_and_unread_filter(client, register):
    alice, bob = register(), register()
    client.post(f"{API}/users/{alice['user']['id']}/follow", headers=bob["headers"])
    (notification,) = client.get(f"{API}/notifications", headers=alice["headers"]).json()

    resp = client.put(f"{API}/notifications/{notification['id']}/read", headers=alice["headers"])

    assert resp.status_code == 200
    assert resp.json()["read"] is True
    unread = client.get(f"{API}/notifications", params={"unread_only": True}, headers=alice["headers"])
    assert unread.json() == []


def test_only_recipient_can_mark_read(client, register):
    alice, bob = register(), register()
    client.post(f"{API}/users/{alice['user']['id']}/follow", headers=bob["headers"])
    (notification,) = client.get(f"{API}/notifications", headers=alice["headers"]).json()

    resp = client.put(f"{API}/notifications/{notification['id']}/read", headers=bob["headers"])

    assert resp.status_code == 403


def test_mark_unknown_notification(client, register):
    alice = register()

    resp = client.put(f"{API}/notifications/missing/read", headers=alice["headers"])

    assert resp.status_code == 404


def test_mark_all_read(client, register):
    alice, bob, carol = register(), register(), register()
    client.post(f"{API}/users/{alice['user']['id']}/follow", headers=bob["headers"])
    client.post(f"{API}/users/{alice['user']['id']}/follow", headers=carol["headers"])

    resp = client.put(f"{API}/notifications/read-all", headers=alice["headers"])

    assert resp.json() == {"updated": 2}
    count = client.get(f"{API}/notifications/unread-count", headers=alice["headers"]).json()
    assert count == {"unread_count": 0}
