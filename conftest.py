import pytest

import api_helpers
import data_generator


# ----------------------------
# Target handling
# ----------------------------
@pytest.fixture(autouse=True)
def primary_target():
    """Every test starts and ends on JSONPlaceholder, whatever it switched to in between."""
    api_helpers.use_primary_target()
    yield api_helpers.PRIMARY_TARGET
    api_helpers.use_primary_target()


@pytest.fixture(scope="session")
def primary_api_available():
    return api_helpers.is_reachable(api_helpers.PRIMARY_TARGET)


@pytest.fixture(autouse=True)
def skip_api_tests_when_offline(request):
    if request.node.get_closest_marker("api") is None:
        return
    if not request.getfixturevalue("primary_api_available"):
        pytest.skip(f"{api_helpers.PRIMARY_TARGET.base_url} is not reachable")


# ----------------------------
# Generated payloads
# ----------------------------
@pytest.fixture
def user_fixture():
    return data_generator.generate_user()


@pytest.fixture
def user_with_address():
    return data_generator.generate_user_with_address()


@pytest.fixture
def valid_user():
    return data_generator.generate_valid_user()
