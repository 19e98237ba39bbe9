import pytest

from jwtkit.core.keys import generate_ec_key_pair, generate_rsa_key_pair


@pytest.fixture(scope="session")
def rsa_keys():
    return generate_rsa_key_pair(key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_keys():
    return generate_rsa_key_pair(key_size=2048)


@pytest.fixture(scope="session")
def ec_keys():
    return generate_ec_key_pair("P-256")


@pytest.fixture(scope="session")
def ec384_keys():
    return generate_ec_key_pair("P-384")


@pytest.fixture(scope="session")
def ec521_keys():
    return generate_ec_key_pair("P-521")
