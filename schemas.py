address = {
    "type": "object",
    "required": ["street", "city", "zipcode"],
    "properties": {
        "street": {
            "type": "string"
        },
        "suite": {
            "type": "string"
        },
        "city": {
            "type": "string"
        },
        "zipcode": {
            "type": "string"
        },
        "geo": {
            "type": "object",
            "properties": {
                "lat": {"type": "string"},
                "lng": {"type": "string"},
            }
        }
    }
}


company = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {
            "type": "string"
        },
        "catchPhrase": {
            "type": "string"
        },
        "bs": {
            "type": "string"
        }
    }
}


user = {
    "type": "object",
    "required": ["id", "name", "username", "email"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "name": {
            "type": "string",
            "minLength": 1
        },
        "username": {
            "type": "string",
            "minLength": 1
        },
        "email": {
            "type": "string",
            "pattern": "^[^@\\s]+@[^@\\s]+$"
        },
        "phone": {
            "type": "string"
        },
        "website": {
            "type": "string"
        },
        "address": address,
        "company": company,
    }
}


user_list = {
    "type": "array",
    "minItems": 1,
    "items": user
}


# POST /users echoes the payload and adds an id
created_user = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "name": {
            "type": ["string", "null"]
        },
        "username": {
            "type": "string"
        },
        "email": {
            "type": "string"
        },
    }
}


post = {
    "type": "object",
    "required": ["id", "userId", "title", "body"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "userId": {
            "type": "integer"
        },
        "title": {
            "type": "string"
        },
        "body": {
            "type": "string"
        }
    }
}
