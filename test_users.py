import pytest
from hamcrest import greater_than, not_none

import schemas
from api_helpers import make_request, non_empty

pytestmark = pytest.mark.api


def test_get_all_users():
    """
    Purpose:  GET /users returns a non-empty JSON array whose first user
              carries an id, name, email and username.
    """
    (
        make_request("GET", "/users")
        .status_code(200)
        .content_type("application/json")
        .body("size()", greater_than(0))
        .body("[0].id", not_none())
        .body("[0].name", non_empty())
        .body("[0].email", non_empty())
        .body("[0].username", non_empty())
        .matches_schema(schemas.user_list, "User list")
    )


def test_get_user_by_id():
    (
        make_request("GET", "/users/{id}", path_params={"id": 1})
        .status_code(200)
        .content_type("application/json")
        .body("id", 1)
        .body("name", "Leanne Graham")
        .body("email", "Sincere@april.biz")
        .body("username", "Bret")
    )


def test_get_user_not_found():
    make_request("GET", "/users/{id}", path_params={"id": 999}).status_code(404)


def test_create_user():
    """
    Purpose:  POST /users with a hand-written JSON document; the service
              echoes the fields back with a freshly assigned id.
    """
    request_body = """
        {
            "name": "John Doe",
            "username": "johndoe",
            "email": "john.doe@example.com",
            "address": {
                "street": "123 Main St",
                "city": "Anytown"
            },
            "phone": "1-555-123-4567",
            "website": "johndoe.com",
            "company": {
                "name": "ABC Company",
                "catchPhrase": "Best company ever"
            }
        }
    """
    (
        make_request("POST", "/users", content=request_body)
        .status_code(201)
        .content_type("application/json")
        .body("name", "John Doe")
        .body("username", "johndoe")
        .body("email", "john.doe@example.com")
        .body("address.city", "Anytown")
        .body("id", not_none())
    )


def test_update_user():
    payload = {
        "name": "John Updated",
        "username": "johnupdated",
        "email": "john.updated@example.com",
    }
    (
        make_request("PUT", "/users/{id}", path_params={"id": 1}, json=payload)
        .status_code(200)
        .content_type("application/json")
        .body("name", "John Updated")
        .body("username", "johnupdated")
        .body("email", "john.updated@example.com")
        .body("id", 1)
    )


def test_delete_user():
    make_request("DELETE", "/users/{id}", path_params={"id": 1}).status_code(200)
