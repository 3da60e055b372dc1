import pytest

from stellar_keys.crypto.keypair import KeyPair

KNOWN_SEED = "SDJHRQF4GCMIIKAAAQ6IHY42X73FQFLHUULAPSKKD4DFDM7UXWWCRHBE"
KNOWN_ACCOUNT_ID = "GCZHXL5HXQX5ABDM26LHYRCQZ5OJFHLOPLZX47WEBP3V2PF5AVFK2A5D"

MESSAGE_SEED = "SAKICEVQLYWGSOJS4WW7HZJWAHZVEEBS527LHK5V4MLJALYKICQCJXMW"
MESSAGE_ACCOUNT_ID = "GBXFXNDLV4LSWA4VB7YIL5GBD7BVNR22SGBTDKMO2SBZZHDXSKZYCP7L"

MUXED_ACCOUNT_ID = "MA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJVAAAAAAAAAAAAAJLK"
MUXED_BASE_ACCOUNT_ID = "GA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJVSGZ"
MUXED_RAW_HEX = "3f0c34bf93ad0d9971d04ccc90f705511c838aad9734a4a2fb0d7a03fc7fe89a8000000000000000"

ILLNESS_MNEMONIC = "illness spike retreat truth genius clock brain pass fit cave bargain toe"

@pytest.fixture
def known_keypair():
    return KeyPair.from_secret_seed(KNOWN_SEED)

@pytest.fixture
def message_keypair():
    return KeyPair.from_secret_seed(MESSAGE_SEED)

@pytest.fixture
def random_keypair():
    return KeyPair.random()

@pytest.fixture
def public_keypair(random_keypair):
    return KeyPair.from_account_id(random_keypair.get_account_id())
