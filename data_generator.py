"""
Randomized test data for request payloads.

Every record kind (user, address, company, login, product) is a small dataclass
whose ``to_dict()`` returns the JSON shape the API expects. Values come from a
per-field strategy table on top of Faker, so a single field can be swapped out
or the whole generator seeded for a reproducible run. Generated records are
checked against their invariants before they are handed to a test.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from faker import Faker

import config
from logging_helper import log_status

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")

VALID_NAME_PREFIX = "Test User "
VALID_USERNAME_PREFIX = "user"

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 12
# lower, upper, digit, special: one of each is always included
PASSWORD_REQUIRED_CLASSES = 4

_MAX_USERNAME_ATTEMPTS = 10

PRODUCT_ADJECTIVES = [
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Enormous", "Mediocre",
    "Synergistic", "Heavy Duty", "Lightweight", "Aerodynamic", "Durable",
]
PRODUCT_MATERIALS = [
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Leather", "Silk", "Wool", "Linen", "Marble", "Iron", "Bronze", "Copper",
    "Aluminum", "Paper",
]
PRODUCT_NOUNS = [
    "Chair", "Car", "Computer", "Gloves", "Pants", "Shirt", "Table", "Shoes",
    "Hat", "Plate", "Knife", "Bottle", "Coat", "Lamp", "Keyboard", "Bag",
    "Bench", "Clock", "Watch", "Wallet",
]
DEPARTMENTS = [
    "Books", "Movies", "Music", "Games", "Electronics", "Computers", "Home",
    "Garden", "Tools", "Grocery", "Health", "Beauty", "Toys", "Kids", "Baby",
    "Clothing", "Shoes", "Jewelery", "Sports", "Outdoors", "Automotive",
    "Industrial",
]


class FixtureInvariantError(ValueError):
    """A generated record broke one of its invariants."""


# ----------------------------
# Records
# ----------------------------
@dataclass
class AddressFixture:
    street: str
    city: str
    zipcode: str

    def to_dict(self) -> Dict[str, Any]:
        return {"street": self.street, "city": self.city, "zipcode": self.zipcode}


@dataclass
class CompanyFixture:
    name: str
    catch_phrase: str
    bs: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "catchPhrase": self.catch_phrase, "bs": self.bs}


@dataclass
class UserFixture:
    name: str
    username: str
    email: str
    phone: str = ""
    website: str = ""
    address: Optional[AddressFixture] = None
    company: Optional[CompanyFixture] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "username": self.username,
            "email": self.email,
        }
        if self.phone:
            data["phone"] = self.phone
        if self.website:
            data["website"] = self.website
        if self.address is not None:
            data["address"] = self.address.to_dict()
        if self.company is not None:
            data["company"] = self.company.to_dict()
        return data


@dataclass
class LoginFixture:
    email: str
    password: str

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "password": self.password}


@dataclass
class ProductFixture:
    name: str
    price: str
    department: str
    material: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "price": self.price,
            "department": self.department,
            "material": self.material,
        }


# ----------------------------
# Value strategies
# ----------------------------
Strategy = Callable[[Faker], str]


def _product_name(fake: Faker) -> str:
    return " ".join([
        fake.random_element(PRODUCT_ADJECTIVES),
        fake.random_element(PRODUCT_MATERIALS),
        fake.random_element(PRODUCT_NOUNS),
    ])


def _price(fake: Faker) -> str:
    return f"{fake.pyfloat(min_value=1, max_value=100, right_digits=2):.2f}"


DEFAULT_STRATEGIES: Dict[str, Strategy] = {
    "name": lambda fake: fake.name(),
    "username": lambda fake: fake.user_name(),
    "email": lambda fake: fake.email(),
    "phone": lambda fake: fake.phone_number(),
    "website": lambda fake: fake.url(),
    "street": lambda fake: fake.street_address(),
    "city": lambda fake: fake.city(),
    "zipcode": lambda fake: fake.postcode(),
    "company_name": lambda fake: fake.company(),
    "catch_phrase": lambda fake: fake.catch_phrase(),
    "bs": lambda fake: fake.bs(),
    "product_name": _product_name,
    "price": _price,
    "department": lambda fake: fake.random_element(DEPARTMENTS),
    "material": lambda fake: fake.random_element(PRODUCT_MATERIALS),
}


def sanitize_username(raw: str) -> str:
    """Drop every character outside [A-Za-z0-9] (spaces, dots, diacritics...)."""
    return _NON_ALPHANUMERIC.sub("", raw)


# ----------------------------
# Invariant checks
# ----------------------------
def _require_text(record: str, field_name: str, value: Any):
    if not isinstance(value, str) or not value.strip():
        raise FixtureInvariantError(f"{record}.{field_name} must be a non-empty string, got {value!r}")


def check_address(address: AddressFixture):
    for name in ("street", "city", "zipcode"):
        _require_text("address", name, getattr(address, name))


def check_company(company: CompanyFixture):
    for name in ("name", "catch_phrase", "bs"):
        _require_text("company", name, getattr(company, name))


def check_email(record: str, email: str):
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise FixtureInvariantError(f"{record}.email is not a valid address: {email!r}")


def check_user(user: UserFixture):
    _require_text("user", "name", user.name)
    if not isinstance(user.username, str) or not USERNAME_PATTERN.match(user.username):
        raise FixtureInvariantError(f"user.username must be alphanumeric and non-empty, got {user.username!r}")
    check_email("user", user.email)
    if user.address is not None:
        check_address(user.address)
    if user.company is not None:
        check_company(user.company)


def check_login(login: LoginFixture):
    check_email("login", login.email)
    password = login.password
    if not any(c.isalpha() for c in password) or not any(c.isdigit() for c in password):
        raise FixtureInvariantError(f"login.password needs at least one letter and one digit, got {password!r}")


def check_product(product: ProductFixture):
    for name in ("name", "department", "material"):
        _require_text("product", name, getattr(product, name))
    try:
        float(product.price)
    except (TypeError, ValueError):
        raise FixtureInvariantError(f"product.price must be numeric, got {product.price!r}") from None


# ----------------------------
# Generator
# ----------------------------
class FixtureGenerator:
    """Builds randomized records from a Faker instance and a strategy table."""

    def __init__(self, locale: Optional[str] = None, seed: Optional[int] = None,
                 strategies: Optional[Dict[str, Strategy]] = None):
        self.fake = Faker(locale or config.FAKER_LOCALE)
        if seed is not None:
            self.fake.seed_instance(seed)

        unknown = set(strategies or {}) - set(DEFAULT_STRATEGIES)
        if unknown:
            raise ValueError(f"Unknown field kinds: {sorted(unknown)}")
        self.strategies = {**DEFAULT_STRATEGIES, **(strategies or {})}

    def seed(self, value: int):
        self.fake.seed_instance(value)

    def value(self, kind: str) -> str:
        return self.strategies[kind](self.fake)

    def _username(self) -> str:
        for _ in range(_MAX_USERNAME_ATTEMPTS):
            username = sanitize_username(self.value("username"))
            if username:
                return username
        # every attempt came back with no usable characters
        return VALID_USERNAME_PREFIX + self.fake.numerify("######")

    def _email(self) -> str:
        return self.value("email")

    def address(self) -> AddressFixture:
        address = AddressFixture(
            street=self.value("street"),
            city=self.value("city"),
            zipcode=self.value("zipcode"),
        )
        check_address(address)
        return address

    def company(self) -> CompanyFixture:
        company = CompanyFixture(
            name=self.value("company_name"),
            catch_phrase=self.value("catch_phrase"),
            bs=self.value("bs"),
        )
        check_company(company)
        return company

    def user(self, with_address: bool = True, with_company: bool = True) -> UserFixture:
        user = UserFixture(
            name=self.value("name"),
            username=self._username(),
            email=self._email(),
            phone=self.value("phone"),
            website=self.value("website"),
            address=self.address() if with_address else None,
            company=self.company() if with_company else None,
        )
        check_user(user)
        log_status("info", "Generated user: ", f"{user.name} <{user.email}> ({user.username})")
        return user

    def user_with_address(self) -> UserFixture:
        user = self.user()
        user.address = self.address()
        return user

    def valid_user(self) -> UserFixture:
        user = UserFixture(
            name=VALID_NAME_PREFIX + self.fake.numerify("###"),
            username=VALID_USERNAME_PREFIX + self.fake.numerify("###"),
            email=self._email(),
        )
        check_user(user)
        return user

    def user_json(self) -> str:
        user = self.user(with_address=False, with_company=False)
        return json.dumps(
            {"name": user.name, "username": user.username, "email": user.email},
            indent=4,
            ensure_ascii=False,
        )

    def login(self, length: Optional[int] = None) -> LoginFixture:
        if length is None:
            length = self.fake.random_int(PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH)
        if length < PASSWORD_REQUIRED_CLASSES:
            raise ValueError(
                f"Password length must be at least {PASSWORD_REQUIRED_CLASSES}, got {length}"
            )
        login = LoginFixture(
            email=self._email(),
            password=self.fake.password(
                length=length, special_chars=True, digits=True, upper_case=True, lower_case=True
            ),
        )
        check_login(login)
        return login

    def product(self) -> ProductFixture:
        product = ProductFixture(
            name=self.value("product_name"),
            price=self.value("price"),
            department=self.value("department"),
            material=self.value("material"),
        )
        check_product(product)
        return product

    def multiple(self, count: int) -> List[UserFixture]:
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"count must be an int, got {type(count).__name__}")
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        return [self.user() for _ in range(count)]


# ----------------------------
# Module-level API used by the tests
# ----------------------------
generator = FixtureGenerator(config.FAKER_LOCALE, config.FAKER_SEED)


def seed(value: int):
    """Re-seed the shared generator for a reproducible run."""
    generator.seed(value)


def generate_user() -> UserFixture:
    return generator.user()


def generate_user_with_address() -> UserFixture:
    return generator.user_with_address()


def generate_company() -> CompanyFixture:
    return generator.company()


def generate_login(length: Optional[int] = None) -> LoginFixture:
    return generator.login(length)


def generate_product() -> ProductFixture:
    return generator.product()


def generate_valid_user() -> UserFixture:
    return generator.valid_user()


def generate_user_json() -> str:
    return generator.user_json()


def generate_multiple(count: int) -> List[UserFixture]:
    return generator.multiple(count)
