import pytest

from security.password import hash_password, verify_password
from security.password_policy import validate_password


def test_hash_and_verify(app):
    with app.app_context():
        hashed = hash_password("correct-horse")

    assert hashed != "correct-horse"
    assert verify_password("correct-horse", hashed)
    assert not verify_password("correct-hors", hashed)


def test_hash_is_salted(app):
    with app.app_context():
        assert hash_password("same-password") != hash_password("same-password")


def test_hash_uses_configured_rounds(app):
    with app.app_context():
        hashed = hash_password("correct-horse")
    # bcrypt encodes the cost as $2b$NN$
    assert hashed.split("$")[2] == "04"


def test_hash_rejects_empty_password():
    with pytest.raises(ValueError):
        hash_password("")


def test_verify_tolerates_garbage_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False
    assert verify_password("", "$2b$04$abc") is False
    assert verify_password("anything", "") is False


def test_policy_defaults_outside_app_context():
    ok, errors = validate_password("eight-ch")
    assert ok and errors == []

    ok, errors = validate_password("seven77")
    assert not ok
    assert errors == ["Password must be at least 8 characters"]


def test_policy_limits_encoded_length():
    ok, errors = validate_password("é" * 40)  # 80 bytes in UTF-8
    assert not ok
    assert errors == ["Password must be at most 72 bytes"]


def test_policy_rejects_non_strings():
    assert validate_password(None) == (False, ["Password must be a string"])


def test_policy_character_classes_follow_config(app):
    app.config.update(PASSWORD_REQUIRE_DIGIT=True, PASSWORD_REQUIRE_UPPER=True)
    with app.app_context():
        ok, errors = validate_password("lowercase-only")
    assert not ok
    assert "Password must include at least 1 number" in errors
    assert "Password must include at least 1 uppercase letter" in errors
