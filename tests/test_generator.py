import json
import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from jwtkit.core import b64url
from jwtkit.core.clock import FixedClock
from jwtkit.core.exceptions import (
    ConfigurationError,
    ExpiredTokenError,
    InvalidSignatureError,
    IssuerNotAllowedError,
    NotYetValidError,
)
from jwtkit.core.token import parse_token
from jwtkit.services.generator import TokenGenerator

secret_key = "super-secret-key"
iss = "issuer-one"
iat = 1628514905
max_age = 3600
now = FixedClock(1628514905.137)

# jti: test-token
example_token = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJpYXQiOjE2Mjg1MTQ5MDUsImV4cCI6MTYyODUxODUwNSwiaXNzIjoiaXNzdWVyLW9uZSIsImp0aSI6InRlc3QtdG9rZW4iLCJkYXRhIjoicGxlcCJ9"
    ".jxk_-8OdlVH4ge8kcoQUhloBaDL0U-2xDKcWhZ82L5M"
)
example_token_with_header = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCIsInVybCI6Imh0dHA6Ly9nb29nbGUuY29tIiwibm9uY2UiOiJyYW5kb20tc3RyaW5nIn0"
    ".eyJpYXQiOjE2Mjg1MTQ5MDUsImV4cCI6MTYyODUxODUwNSwiaXNzIjoiaXNzdWVyLW9uZSIsImp0aSI6InRlc3QtdG9rZW4iLCJkYXRhIjoicGxlcCJ9"
    ".IbdhfJsWFCkPnXHZMvHa_gHTwgfDsqiysODavc6GcRo"
)


def token_generator(**overrides) -> TokenGenerator:
    options = {"iss": iss, "max_age": max_age, "clock": now}
    options.update(overrides)
    return TokenGenerator(secret_key, **options)


def test_generates_known_hs256_token():
    token = token_generator().generate({"data": "plep", "jti": "test-token"})

    header_segment, payload_segment, _ = token.split(".")
    assert b64url.decode_text(header_segment) == '{"alg":"HS256","typ":"JWT"}'
    assert (
        b64url.decode_text(payload_segment)
        == '{"iat":1628514905,"exp":1628518505,"iss":"issuer-one","jti":"test-token","data":"plep"}'
    )
    assert token == example_token


def test_generates_known_token_with_custom_header_values():
    token = token_generator().generate(
        {"data": "plep", "jti": "test-token"},
        header={"url": "http://google.com", "nonce": "random-string"},
    )
    assert token == example_token_with_header


def test_verifies_known_token():
    assert token_generator().verify(example_token) == {
        "iat": iat,
        "exp": iat + max_age,
        "iss": iss,
        "jti": "test-token",
        "data": "plep",
    }


def test_generated_ids_are_unique_random_hex():
    generator = token_generator()
    ids = {parse_token(generator.generate()).payload["jti"] for _ in range(50)}
    assert len(ids) == 50
    assert all(re.fullmatch(r"[0-9a-f]{32}", value) for value in ids)


def test_generator_is_safe_to_share_between_threads():
    generator = token_generator()
    with ThreadPoolExecutor(max_workers=4) as pool:
        tokens = list(pool.map(lambda n: generator.generate({"n": n}), range(20)))
    assert [generator.verify(token)["n"] for token in tokens] == list(range(20))


def test_explicit_exp_wins_over_max_age():
    token = token_generator().generate({"exp": iat + 10})
    assert parse_token(token).payload["exp"] == iat + 10


def test_caller_claims_override_defaults_in_place():
    token = token_generator().generate({"iss": "custom", "data": 1})
    payload = parse_token(token).payload
    assert list(payload) == ["iat", "exp", "iss", "jti", "data"]
    assert payload["iss"] == "custom"


def test_issuer_is_omitted_when_not_configured():
    generator = TokenGenerator(secret_key, clock=now)
    token = generator.generate({"data": "plep"})
    payload = parse_token(token).payload
    assert "iss" not in payload
    assert payload["exp"] == iat + 3600 * 24
    assert generator.verify(token)["data"] == "plep"


def test_raises_because_token_is_expired():
    generator = token_generator()
    token = generator.generate({"data": "plep", "exp": iat - 3600})
    with pytest.raises(ExpiredTokenError, match="expired"):
        generator.verify(token)


def test_raises_because_token_is_not_yet_valid():
    generator = token_generator()
    token = generator.generate({"data": "plep", "nbf": iat + 360000})
    with pytest.raises(NotYetValidError, match="invalid nbf"):
        generator.verify(token)


def test_token_becomes_valid_once_clock_passes_nbf():
    token = token_generator().generate({"nbf": iat + 60})
    later = token_generator(clock=now.advance(120))
    assert later.verify(token)["nbf"] == iat + 60


def test_raises_because_token_signature_is_broken():
    with pytest.raises(InvalidSignatureError, match="signature"):
        token_generator().verify(example_token[:-1])


def test_raises_because_token_issuer_is_not_allowed():
    generator = token_generator()
    token = generator.generate({"data": "plep"})
    with pytest.raises(IssuerNotAllowedError, match="iss not allowed"):
        generator.verify(token, allowed_issuers=["plep"])


def test_defaults_issuer_policy_to_own_issuer():
    foreign = token_generator(iss="someone-else").generate({"data": "plep"})
    with pytest.raises(IssuerNotAllowedError):
        token_generator().verify(foreign)
    assert token_generator().verify(foreign, allowed_issuers=["someone-else"])["iss"] == "someone-else"


def test_configured_allowed_issuers_replace_own_issuer():
    generator = token_generator(allowed_issuers=["issuer-one", "issuer-two"])
    foreign = token_generator(iss="issuer-two").generate()
    assert generator.verify(foreign)["iss"] == "issuer-two"


def test_check_reports_reason_without_raising():
    generator = token_generator()
    result = generator.check(generator.generate({"exp": iat - 1}))
    assert not result.ok
    assert result.reason == "expired"
    assert generator.check(example_token).ok


def test_create_signs_payload_as_is():
    token = token_generator().create({"data": "plep"})
    assert parse_token(token).payload == {"data": "plep"}


def test_build_returns_unsigned_segments():
    unsigned = token_generator().build({"jti": "test-token", "data": "plep"})
    assert unsigned.header_segment == example_token.split(".")[0]
    assert unsigned.payload_segment == example_token.split(".")[1]
    assert json.loads(b64url.decode_text(unsigned.payload_segment))["data"] == "plep"


def test_rs256_generator_signs_with_private_and_verifies_with_public(rsa_keys, other_rsa_keys):
    private_pem, public_pem = rsa_keys
    generator = TokenGenerator(private_pem, iss=iss, algorithm="RS256", verification_key=public_pem, clock=now)

    token = generator.generate({"data": "plep"})

    assert parse_token(token).header == {"alg": "RS256", "typ": "JWT"}
    assert generator.verify(token)["data"] == "plep"
    wrong_key = TokenGenerator(other_rsa_keys[0], iss=iss, algorithm="RS256", clock=now)
    with pytest.raises(InvalidSignatureError):
        wrong_key.verify(token)


def test_es256_tokens_verify_even_though_signatures_vary(ec_keys):
    private_pem, public_pem = ec_keys
    generator = TokenGenerator(private_pem, algorithm="ES256", verification_key=public_pem, clock=now)

    first = generator.generate({"data": "ec256-signed", "jti": "fixed"})
    second = generator.generate({"data": "ec256-signed", "jti": "fixed"})

    assert first.rsplit(".", 1)[0] == second.rsplit(".", 1)[0]
    assert generator.verify(first)["data"] == "ec256-signed"
    assert generator.verify(second)["data"] == "ec256-signed"


def test_per_call_algorithm_override():
    generator = token_generator()
    token = generator.generate({"data": "plep"}, alg="HS512")
    assert parse_token(token).alg == "HS512"
    assert generator.verify(token)["data"] == "plep"


@pytest.mark.parametrize("key", [None, "", b""])
def test_requires_secret_key(key):
    with pytest.raises(ConfigurationError, match="without secret key"):
        TokenGenerator(key)


def test_rejects_unknown_default_algorithm():
    with pytest.raises(ConfigurationError, match="Unsupported algorithm"):
        TokenGenerator(secret_key, algorithm="HS1024")


@pytest.mark.parametrize("value", [0, -1, 1.5, True])
def test_rejects_invalid_max_age(value):
    with pytest.raises(ConfigurationError, match="max_age"):
        TokenGenerator(secret_key, max_age=value)


def test_rejects_unknown_algorithm_at_generate_time():
    with pytest.raises(ConfigurationError):
        token_generator().generate({"data": "plep"}, alg="none")
