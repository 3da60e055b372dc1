import base64
import threading

import pytest

from stellar_keys.core.config import KeysConfig
from stellar_keys.core.exceptions import (
    CryptoError, DerivationError, MissingPrivateKeyError, StrKeyError
)
from stellar_keys.core.key_types import DecoratedSignature
from stellar_keys.core.xdr_types import CryptoKeyType, SignerKeyType
from stellar_keys.crypto.derivation import bip39_seed_hex
from stellar_keys.crypto.keypair import KeyPair, FullKeyPair, PublicOnlyKeyPair
from stellar_keys.utils.logging import LogManager

from conftest import (
    KNOWN_SEED, KNOWN_ACCOUNT_ID, MESSAGE_SEED, MESSAGE_ACCOUNT_ID,
    MUXED_ACCOUNT_ID, MUXED_BASE_ACCOUNT_ID, ILLNESS_MNEMONIC
)

HELLO_SIGNATURE = ("7cee5d6d885752104c85eea421dfdcb95abf01f1271d11c4bec3fcbd7874dccd"
                   "6e2e98b97b8eb23b643cac4073bb77de5d07b0710139180ae9f3cbba78f2ba04")
JAPANESE_SIGNATURE = ("083536eb95ecf32dce59b07fe7a1fd8cf814b2ce46f40d2a16e4ea1f6cecd980"
                      "e04e6fbef9d21f98011c785a81edb85f3776a6e7d942b435eb0adc07da4d4604")
BINARY_MESSAGE = base64.b64decode("2zZDP1sa1BVBfLP7TeeMk3sUbaxAkUhBhDiNdrksaFo=")
BINARY_SIGNATURE = ("540d7eee179f370bf634a49c1fa9fe4a58e3d7990b0207be336c04edfcc539ff"
                    "8bd0c31bb2c0359b07c9651cb2ae104e4504657b5d17d43c69c7e50e23811b0d")

ILLNESS_ACCOUNTS = [
    (0, "GDRXE2BQUC3AZNPVFSCEZ76NJ3WWL25FYFK6RGZGIEKWE4SOOHSUJUJ6",
     "SBGWSG6BTNCKCOB3DIFBGCVMUPQFYPA2G4O34RMTB343OYPXU5DJDVMN"),
    (1, "GBAW5XGWORWVFE2XTJYDTLDHXTY2Q2MO73HYCGB3XMFMQ562Q2W2GJQX",
     "SCEPFFWGAG5P2VX5DHIYK3XEMZYLTYWIPWYEKXFHSK25RVMIUNJ7CTIS"),
    (5, "GBRQY5JFN5UBG5PGOSUOL4M6D7VRMAYU6WW2ZWXBMCKB7GPT3YCBU2XZ",
     "SCK27SFHI3WUDOEMJREV7ZJQG34SCBR6YWCE6OLEXUS2VVYTSNGCRS6X"),
    (9, "GBTVYYDIYWGUQUTKX6ZMLGSZGMTESJYJKJWAATGZGITA25ZB6T5REF44",
     "SCJGVMJ66WAUHQHNLMWDFGY2E72QKSI3XGSBYV6BANDFUFE7VY4XNXXR"),
]

CABLE_MNEMONIC = ("cable spray genius state float twenty onion head street palace net private "
                  "method loan turn phrase state blanket interest dry amazing dress blast tube")
CABLE_ACCOUNTS = [
    (0, "GDAHPZ2NSYIIHZXM56Y36SBVTV5QKFIZGYMMBHOU53ETUSWTP62B63EQ",
     "SAFWTGXVS7ELMNCXELFWCFZOPMHUZ5LXNBGUVRCY3FHLFPXK4QPXYP2X"),
    (1, "GDY47CJARRHHL66JH3RJURDYXAMIQ5DMXZLP3TDAUJ6IN2GUOFX4OJOC",
     "SBQPDFUGLMWJYEYXFRM5TQX3AX2BR47WKI4FDS7EJQUSEUUVY72MZPJF"),
]

ABANDON_MNEMONIC = "abandon " * 11 + "about"

def test_from_seed_known_vector(known_keypair):
    assert isinstance(known_keypair, FullKeyPair)
    assert known_keypair.get_account_id() == KNOWN_ACCOUNT_ID
    assert known_keypair.account_id == KNOWN_ACCOUNT_ID
    assert known_keypair.get_secret_seed() == KNOWN_SEED
    assert known_keypair.can_sign

def test_from_seed_is_deterministic():
    first = KeyPair.from_seed(KNOWN_SEED)
    second = KeyPair.from_seed(KNOWN_SEED)
    assert first.get_account_id() == second.get_account_id()
    assert first.get_public_key() == second.get_public_key()
    assert first.get_private_key() == second.get_private_key()

def test_from_seed_accepts_raw_bytes(known_keypair):
    again = KeyPair.from_seed(known_keypair.get_private_key())
    assert again.get_secret_seed() == KNOWN_SEED

def test_from_private_key_hex(known_keypair):
    again = KeyPair.from_private_key(known_keypair.get_private_key().hex())
    assert again == known_keypair
    with pytest.raises(CryptoError):
        KeyPair.from_private_key("zz" * 32)
    with pytest.raises(CryptoError):
        KeyPair.from_private_key(b"\x00" * 16)

def test_from_seed_rejects_account_id():
    with pytest.raises(StrKeyError):
        KeyPair.from_seed(KNOWN_ACCOUNT_ID)
    with pytest.raises(TypeError):
        KeyPair.from_secret_seed(b"\x00" * 32)

def test_random_keypairs_differ():
    first, second = KeyPair.random(), KeyPair.random()
    assert isinstance(first, FullKeyPair)
    assert first.get_account_id() != second.get_account_id()

def test_public_only_variants(random_keypair):
    by_account = KeyPair.from_account_id(random_keypair.get_account_id())
    by_key = KeyPair.from_public_key(random_keypair.get_public_key())
    for keypair in (by_account, by_key):
        assert isinstance(keypair, PublicOnlyKeyPair)
        assert not keypair.can_sign
        assert keypair.get_private_key() is None
        assert keypair.get_secret_seed() is None
        assert keypair.get_account_id() == random_keypair.get_account_id()

def test_from_account_id_accepts_muxed():
    keypair = KeyPair.from_account_id(MUXED_ACCOUNT_ID)
    assert isinstance(keypair, PublicOnlyKeyPair)
    assert keypair.get_account_id() == MUXED_BASE_ACCOUNT_ID

def test_from_account_id_rejects_seed():
    with pytest.raises(StrKeyError):
        KeyPair.from_account_id(KNOWN_SEED)

def test_full_keypair_rejects_mismatched_public_key(random_keypair):
    with pytest.raises(CryptoError):
        FullKeyPair(random_keypair.get_private_key(), KeyPair.random().get_public_key())

def test_public_key_length_is_checked():
    with pytest.raises(CryptoError):
        KeyPair.from_public_key(b"\x01" * 31)

def test_base_keypair_is_abstract():
    with pytest.raises(TypeError):
        KeyPair(b"\x00" * 32)

def test_every_keypair_is_one_of_two_variants(random_keypair, public_keypair):
    for keypair in (random_keypair, public_keypair, KeyPair.from_seed(KNOWN_SEED)):
        assert isinstance(keypair, (FullKeyPair, PublicOnlyKeyPair))

def test_sign_and_verify(random_keypair):
    signature = random_keypair.sign(b"hello")
    assert len(signature) == 64
    assert random_keypair.verify_signature(signature, b"hello")
    assert not random_keypair.verify_signature(signature, b"hellO")

def test_public_only_can_verify(random_keypair, public_keypair):
    signature = random_keypair.sign(b"hello")
    assert public_keypair.verify_signature(signature, b"hello")

def test_public_only_sign_raises(public_keypair):
    with pytest.raises(MissingPrivateKeyError) as exc_info:
        public_keypair.sign(b"hello")
    assert exc_info.value.account_id == public_keypair.get_account_id()

    with pytest.raises(MissingPrivateKeyError):
        public_keypair.sign_message("hello")
    with pytest.raises(MissingPrivateKeyError):
        public_keypair.sign_decorated(b"hello")
    with pytest.raises(MissingPrivateKeyError):
        public_keypair.sign_payload_decorated(b"hello")

def test_empty_message(random_keypair):
    signature = random_keypair.sign(b"")
    assert random_keypair.verify_signature(signature, b"")

@pytest.mark.parametrize("signature", [b"", b"\x00" * 10, b"\x00" * 63, b"\x00" * 65, None, "sig"])
def test_verify_malformed_signature_is_false(random_keypair, signature):
    assert random_keypair.verify_signature(signature, b"hello") is False

def test_sign_message_vectors(message_keypair):
    assert message_keypair.get_account_id() == MESSAGE_ACCOUNT_ID
    assert message_keypair.sign_message("Hello, World!").hex() == HELLO_SIGNATURE
    assert message_keypair.sign_message("こんにちは、世界！").hex() == JAPANESE_SIGNATURE
    assert message_keypair.sign_message(BINARY_MESSAGE).hex() == BINARY_SIGNATURE

def test_verify_message_vectors():
    keypair = KeyPair.from_account_id(MESSAGE_ACCOUNT_ID)
    assert keypair.verify_message("Hello, World!", bytes.fromhex(HELLO_SIGNATURE))
    assert keypair.verify_message("こんにちは、世界！", bytes.fromhex(JAPANESE_SIGNATURE))
    assert keypair.verify_message(BINARY_MESSAGE, bytes.fromhex(BINARY_SIGNATURE))
    assert base64.b64decode("fO5dbYhXUhBMhe6kId/cuVq/AfEnHRHEvsP8vXh03M1uLpi5e46yO2Q8rEBzu3feXQewcQE5GArp88u6ePK6BA==") == bytes.fromhex(HELLO_SIGNATURE)

def test_verify_message_rejects_mismatch(message_keypair):
    signature = message_keypair.sign_message("Hello, World!")
    assert not message_keypair.verify_message("Hello, World?", signature)
    assert not message_keypair.verify_message("Hello, World!", signature[:63])
    assert not message_keypair.verify_message(None, signature)

def test_str_message_equals_utf8_bytes(message_keypair):
    text = "こんにちは、世界！"
    assert message_keypair.sign_message(text) == message_keypair.sign_message(text.encode("utf-8"))

def test_hint(random_keypair, public_keypair):
    assert random_keypair.get_hint() == random_keypair.get_public_key()[-4:]
    assert public_keypair.get_hint() == random_keypair.get_hint()

def test_public_key_checksum(known_keypair):
    public_key = known_keypair.get_public_key()
    checksum = known_keypair.get_public_key_checksum()
    assert isinstance(checksum, int)
    assert checksum == public_key[-2] | (public_key[-1] << 8)

def test_sign_decorated(random_keypair):
    decorated = random_keypair.sign_decorated(b"tx hash")
    assert isinstance(decorated, DecoratedSignature)
    assert decorated.hint == random_keypair.get_hint()
    assert random_keypair.verify_signature(decorated.signature, b"tx hash")

def test_sign_payload_decorated(random_keypair):
    payload = bytes([1, 2, 3, 4, 5, 6])
    decorated = random_keypair.sign_payload_decorated(payload)
    expected = bytes(a ^ b for a, b in zip(random_keypair.get_hint(), payload[-4:]))
    assert decorated.hint == expected
    assert random_keypair.verify_signature(decorated.signature, payload)

def test_sign_payload_decorated_short_payload_is_left_padded(random_keypair):
    decorated = random_keypair.sign_payload_decorated(b"\x01\x02")
    hint = random_keypair.get_hint()
    assert decorated.hint == bytes([hint[0], hint[1], hint[2] ^ 0x01, hint[3] ^ 0x02])

def test_decorated_signature_encoding(random_keypair):
    encoded = random_keypair.sign_decorated(b"data").encode()
    assert len(encoded) == 4 + 4 + 64
    assert encoded[4:8] == b"\x00\x00\x00\x40"

@pytest.mark.parametrize("index,account_id,seed", ILLNESS_ACCOUNTS)
def test_from_mnemonic_sep5_vectors(index, account_id, seed):
    keypair = KeyPair.from_mnemonic(ILLNESS_MNEMONIC, index)
    assert keypair.get_account_id() == account_id
    assert keypair.get_secret_seed() == seed

@pytest.mark.parametrize("index,account_id,seed", CABLE_ACCOUNTS)
def test_from_mnemonic_with_passphrase(index, account_id, seed):
    keypair = KeyPair.from_mnemonic(CABLE_MNEMONIC, index, "p4ssphr4se")
    assert keypair.get_account_id() == account_id
    assert keypair.get_secret_seed() == seed

def test_from_mnemonic_abandon_vector():
    keypair = KeyPair.from_mnemonic(ABANDON_MNEMONIC, 0)
    assert keypair.get_account_id() == "GB3JDWCQJCWMJ3IILWIGDTQJJC5567PGVEVXSCVPEQOTDN64VJBDQBYX"
    assert keypair.get_secret_seed() == "SBUV3MRWKNS6AYKZ6E6MOUVF2OYMON3MIUASWL3JLY5E3ISDJFELYBRZ"

def test_from_mnemonic_indices_diverge():
    first = KeyPair.from_mnemonic(ILLNESS_MNEMONIC, 0)
    second = KeyPair.from_mnemonic(ILLNESS_MNEMONIC, 1)
    assert first.get_account_id() != second.get_account_id()
    assert first.get_secret_seed() != second.get_secret_seed()

def test_from_bip39_seed_hex_matches_mnemonic():
    seed_hex = bip39_seed_hex(ILLNESS_MNEMONIC)
    for index in (0, 1, 5):
        from_hex = KeyPair.from_bip39_seed_hex(seed_hex, index)
        from_words = KeyPair.from_mnemonic(ILLNESS_MNEMONIC, index)
        assert from_hex.get_account_id() == from_words.get_account_id()
        assert from_hex.get_secret_seed() == from_words.get_secret_seed()

def test_from_bip39_seed_hex_rejects_bad_input():
    with pytest.raises(DerivationError):
        KeyPair.from_bip39_seed_hex("not hex", 0)
    with pytest.raises(DerivationError):
        KeyPair.from_bip39_seed_hex("00" * 32, 0)

def test_from_mnemonic_rejects_bad_checksum():
    patterns = LogManager().sensitive_filter.sensitive_patterns
    with pytest.raises(DerivationError):
        KeyPair.from_mnemonic("abandon " * 12, 0)
    assert "abandon " * 12 not in patterns

def test_from_mnemonic_respects_config_path():
    config = KeysConfig(coin_type=1)
    assert KeyPair.from_mnemonic(ILLNESS_MNEMONIC, 0, config=config) != \
        KeyPair.from_mnemonic(ILLNESS_MNEMONIC, 0)

def test_xdr_muxed_account(random_keypair):
    plain = random_keypair.get_xdr_muxed_account()
    assert plain.discriminant is CryptoKeyType.KEY_TYPE_ED25519
    assert plain.ed25519 == random_keypair.get_public_key()

    muxed = random_keypair.get_xdr_muxed_account(42)
    assert muxed.discriminant is CryptoKeyType.KEY_TYPE_MUXED_ED25519
    assert muxed.med25519.id == 42
    assert muxed.account_public_key == random_keypair.get_public_key()

def test_xdr_signer_key(public_keypair):
    signer_key = public_keypair.get_xdr_signer_key()
    assert signer_key.type is SignerKeyType.ED25519
    assert signer_key.encode() == b"\x00\x00\x00\x00" + public_keypair.get_public_key()

def test_equality_and_hash(random_keypair, public_keypair):
    assert random_keypair == public_keypair
    assert hash(random_keypair) == hash(public_keypair)
    assert random_keypair != KeyPair.random()
    assert len({random_keypair, public_keypair}) == 1

def test_repr_hides_secret(known_keypair):
    text = repr(known_keypair)
    assert KNOWN_ACCOUNT_ID in text
    assert KNOWN_SEED not in text
    assert known_keypair.get_private_key().hex() not in text

def test_to_public_key_pair(known_keypair):
    public = known_keypair.to_public_key_pair()
    assert isinstance(public, PublicOnlyKeyPair)
    assert public.get_account_id() == KNOWN_ACCOUNT_ID
    assert known_keypair.to_key_material().has_private_key
    assert not public.to_key_material().has_private_key

def test_concurrent_signing(known_keypair):
    results = []

    def worker(index):
        message = f"message {index}".encode()
        signature = known_keypair.sign(message)
        results.append(known_keypair.verify_signature(signature, message))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [True] * 8
