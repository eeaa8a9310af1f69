import re

from merchstore.services.order_code import generate_order_code

ITEMS = [{"product": "Pulli", "color": "rot", "size": "M", "quantity": 2}]
FIXED_NONCE = bytes(range(16))


def test_fixed_nonce_gives_exact_code():
    assert generate_order_code("a@b.com", ITEMS, nonce=FIXED_NONCE) == "F386756807D5"


def test_fixed_nonce_is_deterministic():
    first = generate_order_code("a@b.com", ITEMS, nonce=FIXED_NONCE)
    assert generate_order_code("a@b.com", ITEMS, nonce=FIXED_NONCE) == first


def test_random_nonce_gives_distinct_codes():
    codes = {generate_order_code("a@b.com", ITEMS) for _ in range(20)}
    assert len(codes) == 20


def test_code_shape():
    code = generate_order_code("someone@school.de", [])
    assert re.fullmatch(r"[0-9A-F]{12}", code)


def test_nonce_changes_code():
    other = generate_order_code("a@b.com", ITEMS, nonce=bytes(16))
    assert other != generate_order_code("a@b.com", ITEMS, nonce=FIXED_NONCE)
