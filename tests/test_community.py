from conftest import act_as


def _post(client, **overrides):
    body = {"title": "My resume tips", "content": "Keep it to one page."}
    body.update(overrides)
    return client.post("/api/community/posts", json=body)


def test_create_post_credits_author(client, make_user):
    user, _ = make_user()

    resp = _post(client, moduleId=2, fileUrl="")

    assert resp.status_code == 201
    post = resp.json()
    assert post["userId"] == user["id"]
    assert post["moduleId"] == 2
    assert post["fileUrl"] is None
    assert post["likesCount"] == 0
    assert post["isLiked"] is False
    assert client.get("/api/auth/me").json()["points"] == 10


def test_create_post_requires_auth_and_known_module(client, make_user):
    assert _post(client).status_code == 401

    make_user()
    resp = _post(client, moduleId=77)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Module not found"
    assert _post(client, title="").status_code == 400


def test_posts_listed_newest_first_with_filters(client, make_user):
    first, _ = make_user(1)
    _post(client, title="first", moduleId=1)
    make_user(2)
    _post(client, title="second")

    assert [p["title"] for p in client.get("/api/community/posts").json()] == ["second", "first"]
    assert [p["title"] for p in client.get(f"/api/community/user/{first['id']}/posts").json()] == ["first"]
    assert [p["title"] for p in client.get("/api/community/module/1/posts").json()] == ["first"]
    assert client.get("/api/community/module/3/posts").json() == []


def test_like_then_unlike_restores_count(client, make_user):
    make_user(1)
    post_id = _post(client).json()["id"]
    make_user(2)

    liked = client.post(f"/api/community/posts/{post_id}/like")
    assert liked.status_code == 200
    assert liked.json()["likesCount"] == 1
    assert liked.json()["isLiked"] is True

    unliked = client.delete(f"/api/community/posts/{post_id}/like")
    assert unliked.status_code == 200
    assert unliked.json()["likesCount"] == 0
    assert unliked.json()["isLiked"] is False


def test_duplicate_like_and_redundant_unlike_rejected(client, make_user):
    make_user()
    post_id = _post(client).json()["id"]

    assert client.delete(f"/api/community/posts/{post_id}/like").json()["message"] == "You have not liked this post"

    assert client.post(f"/api/community/posts/{post_id}/like").status_code == 200
    again = client.post(f"/api/community/posts/{post_id}/like")
    assert again.status_code == 400
    assert again.json()["message"] == "You have already liked this post"
    assert client.get(f"/api/community/posts/{post_id}").json()["likesCount"] == 1


def test_like_missing_post_is_404(client, make_user):
    make_user()

    assert client.post("/api/community/posts/999/like").status_code == 404
    assert client.delete("/api/community/posts/999/like").status_code == 404


def test_is_liked_is_relative_to_caller(client, make_user):
    _, author_token = make_user(1)
    post_id = _post(client).json()["id"]
    _, fan_token = make_user(2)
    client.post(f"/api/community/posts/{post_id}/like")

    act_as(client, fan_token)
    assert client.get("/api/community/posts").json()[0]["isLiked"] is True
    assert client.get(f"/api/community/posts/{post_id}").json()["isLiked"] is True

    act_as(client, author_token)
    assert client.get("/api/community/posts").json()[0]["isLiked"] is False

    client.cookies.clear()
    anonymous = client.get("/api/community/posts")
    assert anonymous.status_code == 200
    assert anonymous.json()[0]["isLiked"] is False
    assert anonymous.json()[0]["likesCount"] == 1


def test_comment_persisted_and_credits_commenter(client, make_user):
    make_user(1)
    post_id = _post(client).json()["id"]
    commenter, _ = make_user(2)

    resp = client.post(f"/api/community/posts/{post_id}/comments", json={"content": "Thanks!"})

    assert resp.status_code == 201
    assert resp.json()["userId"] == commenter["id"]
    comments = client.get(f"/api/community/posts/{post_id}/comments").json()
    assert [c["content"] for c in comments] == ["Thanks!"]
    assert client.get("/api/auth/me").json()["points"] == 5


def test_comment_errors(client, make_user):
    assert client.post("/api/community/posts/1/comments", json={"content": "hi"}).status_code == 401

    make_user()
    assert client.post("/api/community/posts/5/comments", json={"content": "hi"}).status_code == 404
    assert client.get("/api/community/posts/5/comments").status_code == 404
    post_id = _post(client).json()["id"]
    assert client.post(f"/api/community/posts/{post_id}/comments", json={"content": ""}).status_code == 400
