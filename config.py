import os

# Primary target: JSONPlaceholder
BASE_URL = os.getenv("BASE_URL", "https://jsonplaceholder.typicode.com").rstrip("/")

# Secondary target for tests that need an API key
REQRES_BASE_URL = os.getenv("REQRES_BASE_URL", "https://reqres.in/api").rstrip("/")
API_KEY = os.getenv("REQRES_API_KEY", "reqres-free-v1")
API_KEY_HEADER = os.getenv("REQRES_API_KEY_HEADER", "X-API-Key")

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Credential literals
VALID_EMAIL = "eve.holt@reqres.in"
VALID_PASSWORD = "cityslicka"
INVALID_EMAIL = "invalid@test.com"

# Response time thresholds (milliseconds)
MAX_RESPONSE_TIME_MS = int(os.getenv("MAX_RESPONSE_TIME_MS", "3000"))
ACCEPTABLE_RESPONSE_TIME_MS = int(os.getenv("ACCEPTABLE_RESPONSE_TIME_MS", "1000"))

# httpx timeout in seconds; one attempt per request unless raised
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "1"))
RETRY_DELAY = float(os.getenv("RETRY_DELAY", "2"))

# Test data generation
FAKER_LOCALE = os.getenv("FAKER_LOCALE", "id_ID")
FAKER_SEED = int(os.environ["FAKER_SEED"]) if os.getenv("FAKER_SEED") else None
