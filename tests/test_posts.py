import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from app.repositories.post import HashTagRepository, PostRepository

@pytest.fixture
def test_post_data():
    return {
        "title": "Test Post",
        "writer": "tester",
        "content": "This is a test post content",
        "hashTags": ["a", "a", "b"]
    }

def create_posts(client, count):
    """创建多篇文章"""
    for i in range(1, count + 1):
        response = client.post("/api/v1/posts", json={
            "title": f"testTitle{i}",
            "writer": f"testWriter{i}",
            "content": f"testContent{i}"
        })
        assert response.status_code == 200

def post_count(client):
    return client.get("/api/v1/posts").json()["count"]

class TestPostCreation:
    def test_create_post(self, client, test_post_data):
        """测试创建文章"""
        response = client.post("/api/v1/posts", json=test_post_data)
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == test_post_data["title"]
        assert data["writer"] == test_post_data["writer"]
        assert data["content"] == test_post_data["content"]
        assert data["hashTags"] == ["a", "b"]
        assert isinstance(data["id"], int)
        assert "createdAt" in data
        assert "updatedAt" in data

    def test_create_post_without_tags(self, client):
        """测试创建没有标签的文章"""
        response = client.post("/api/v1/posts", json={"title": "t", "writer": "w"})
        assert response.status_code == 200
        assert response.json()["hashTags"] == []
        assert response.json()["content"] is None

    def test_blank_tags_are_dropped(self, client):
        response = client.post("/api/v1/posts", json={
            "title": "t", "writer": "w", "hashTags": ["", "  ", " x "]
        })
        assert response.status_code == 200
        assert response.json()["hashTags"] == ["x"]

    def test_create_post_empty_title(self, client, test_post_data):
        """测试标题为空（应该失败）"""
        test_post_data["title"] = ""
        response = client.post("/api/v1/posts", json=test_post_data)
        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["title"]
        assert post_count(client) == 0

    def test_create_post_collects_every_field_error(self, client):
        """测试返回全部字段错误"""
        response = client.post("/api/v1/posts", json={"title": "", "content": "c"})
        assert response.status_code == 400
        errors = response.json()["errors"]
        assert [error["field"] for error in errors] == ["title", "writer"]
        assert all(error["message"] for error in errors)
        assert post_count(client) == 0

    def test_create_post_blank_writer(self, client):
        """空白作者由服务层拒绝"""
        response = client.post("/api/v1/posts", json={"title": "t", "writer": "   "})
        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["writer"]
        assert post_count(client) == 0

    def test_create_post_internal_error_rolls_back(self, client, test_post_data, monkeypatch):
        """测试写入标签失败时文章不会保留"""
        def broken_add_all(self, post_id, tag_names):
            raise OperationalError("INSERT INTO hash_tags", {}, Exception("disk I/O error"))

        monkeypatch.setattr(HashTagRepository, "add_all", broken_add_all)
        response = client.post("/api/v1/posts", json=test_post_data)
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create post"
        assert "disk" not in response.text

        monkeypatch.undo()
        assert post_count(client) == 0

    def test_create_post_tag_too_long(self, client):
        """测试标签超过列长度（应该失败）"""
        response = client.post("/api/v1/posts", json={
            "title": "t", "writer": "w", "hashTags": ["ok", "x" * 80]
        })
        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["hashTags.1"]
        assert post_count(client) == 0

    def test_create_post_constraint_violation(self, client, test_post_data, monkeypatch):
        """测试数据库约束失败时返回字段错误且不写入"""
        def rejected_add_all(self, post_id, tag_names):
            raise IntegrityError(
                "INSERT INTO hash_tags", {}, Exception("NOT NULL constraint failed: hash_tags.tag_name")
            )

        monkeypatch.setattr(HashTagRepository, "add_all", rejected_add_all)
        response = client.post("/api/v1/posts", json=test_post_data)
        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["hashTags"]

        monkeypatch.undo()
        assert post_count(client) == 0

class TestPostRetrieval:
    def test_get_post(self, client, test_post_data):
        """测试获取文章"""
        post_id = client.post("/api/v1/posts", json=test_post_data).json()["id"]

        response = client.get(f"/api/v1/posts/{post_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == post_id
        assert data["title"] == test_post_data["title"]
        assert sorted(data["hashTags"]) == ["a", "b"]

    def test_get_missing_post(self, client):
        """测试获取不存在的文章"""
        response = client.get("/api/v1/posts/999")
        assert response.status_code == 404
        assert "999" in response.json()["detail"]

    def test_list_posts(self, client):
        """测试分页获取文章列表"""
        create_posts(client, 25)

        response = client.get("/api/v1/posts", params={"page": 2, "size": 10})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 25
        assert [post["title"] for post in data["posts"]] == [f"testTitle{i}" for i in range(15, 5, -1)]
        assert data["pageInfo"] == {
            "currentPage": 2,
            "startPage": 1,
            "endPage": 3,
            "finalPage": 3,
            "prev": False,
            "next": False,
            "totalCount": 25,
        }

    def test_list_posts_beyond_last_page(self, client):
        create_posts(client, 3)

        data = client.get("/api/v1/posts", params={"page": 5, "size": 10}).json()
        assert data["posts"] == []
        assert data["count"] == 3

    def test_list_posts_page_zero_is_first_page(self, client):
        create_posts(client, 3)

        data = client.get("/api/v1/posts", params={"page": 0, "size": 2}).json()
        assert data["pageInfo"]["currentPage"] == 1
        assert [post["title"] for post in data["posts"]] == ["testTitle3", "testTitle2"]

    def test_list_posts_bad_page_param(self, client):
        response = client.get("/api/v1/posts", params={"page": "abc"})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "page"

    def test_list_posts_huge_page(self, client):
        """测试极大页码返回空列表"""
        create_posts(client, 1)

        response = client.get("/api/v1/posts", params={"page": 10**19, "size": 10})
        assert response.status_code == 200
        data = response.json()
        assert data["posts"] == []
        assert data["count"] == 1
        assert data["pageInfo"]["currentPage"] == 10**19
        assert data["pageInfo"]["next"] is False

    def test_method_not_allowed_keeps_headers(self, client):
        response = client.post("/api/v1/posts/1")
        assert response.status_code == 405
        assert "GET" in response.headers["allow"]

class TestPostUpdate:
    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_update_post(self, client, test_post_data, method):
        """测试修改文章"""
        created = client.post("/api/v1/posts", json=test_post_data).json()

        new_data = {
            "postId": created["id"],
            "title": "Updated Title",
            "content": "Updated content"
        }
        response = getattr(client, method)("/api/v1/posts", json=new_data)
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == new_data["title"]
        assert data["content"] == new_data["content"]
        assert data["writer"] == test_post_data["writer"]
        assert sorted(data["hashTags"]) == ["a", "b"]
        assert data["createdAt"] == created["createdAt"]

    def test_update_missing_post(self, client, test_post_data):
        """测试修改不存在的文章（应该失败）"""
        client.post("/api/v1/posts", json=test_post_data)
        before = client.get("/api/v1/posts").json()

        response = client.put("/api/v1/posts", json={"postId": 999, "title": "x", "content": "y"})
        assert response.status_code == 404

        assert client.get("/api/v1/posts").json() == before

    def test_update_post_empty_title(self, client, test_post_data):
        post_id = client.post("/api/v1/posts", json=test_post_data).json()["id"]

        response = client.put("/api/v1/posts", json={"postId": post_id, "title": ""})
        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["title"]
        assert client.get(f"/api/v1/posts/{post_id}").json()["title"] == test_post_data["title"]

class TestPostDeletion:
    def test_delete_post(self, client, test_post_data):
        """测试删除文章"""
        post_id = client.post("/api/v1/posts", json=test_post_data).json()["id"]

        response = client.delete(f"/api/v1/posts/{post_id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Post deleted"}

        # 确认文章已被删除
        response = client.get(f"/api/v1/posts/{post_id}")
        assert response.status_code == 404

    def test_delete_missing_post(self, client):
        response = client.delete("/api/v1/posts/999")
        assert response.status_code == 404

    def test_delete_conflict(self, client, test_post_data, monkeypatch):
        """测试删除被引用的文章返回冲突"""
        post_id = client.post("/api/v1/posts", json=test_post_data).json()["id"]

        def blocked_delete(self, post):
            raise IntegrityError("DELETE FROM posts", {}, Exception("FOREIGN KEY constraint failed"))

        monkeypatch.setattr(PostRepository, "delete", blocked_delete)
        response = client.delete(f"/api/v1/posts/{post_id}")
        assert response.status_code == 409
        assert str(post_id) in response.json()["detail"]

        monkeypatch.undo()
        assert client.get(f"/api/v1/posts/{post_id}").status_code == 200
