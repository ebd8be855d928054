import pytest
from eth_account import Account

from conftest import TEST_PRIVATE_KEY
from errors import SigningError
from signing import sign_transaction, signing_hash
from transactions import (
    LegacyTransaction,
    build_transaction,
    encode_signed_transaction,
    encode_signing_payload,
    transaction_hash,
)

RECIPIENT = "0x0000000000000000000000000000000000000001"
TOKEN = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
SLOT_1 = "0x" + "00" * 31 + "01"
SLOT_2 = "0x" + "00" * 31 + "02"


def test_eip155_reference_vector():
    # Example from the EIP-155 text.
    tx = build_transaction(
        chain_id=1,
        to="0x3535353535353535353535353535353535353535",
        value=10**18,
        nonce=9,
        gas_limit=21000,
        gas_price=20 * 10**9,
    )
    assert encode_signing_payload(tx).hex() == (
        "ec098504a817c800825208943535353535353535353535353535353535353535880de0b6b3a764000080018080"
    )
    assert signing_hash(tx).hex() == "daf5a779ae972f972197303d7b574746c7ef83eadac0f2791ad23db92e4c8e53"

    sign_transaction(tx, b"\x46" * 32)
    assert tx.v == 37
    assert tx.r == 18515461264373351373200002665853028612451056578545711640558177340181847433846
    assert tx.s == 46948507304638947509940763649030358759909902576025900602547168820602576006531
    assert encode_signed_transaction(tx).hex() == (
        "f86c098504a817c800825208943535353535353535353535353535353535353535880de0b6b3a7640000"
        "8025a028ef61340bd939bc2195fe537567866003e1a15d3c71ff63e1590620aa636276a067cbe9d8997f"
        "761aecb703304b3800ccf555c9f3dc64214b297fb1966a3b6d83"
    )


def test_legacy_v_carries_chain_id():
    tx = build_transaction(chain_id=1, to=RECIPIENT, value=0, nonce=0, gas_limit=21000, gas_price=1_000_000_000)
    assert isinstance(tx, LegacyTransaction)
    sign_transaction(tx, TEST_PRIVATE_KEY)
    assert tx.v in (37, 38)
    assert tx.is_signed


def test_legacy_v_for_other_chain():
    tx = build_transaction(chain_id=5, to=RECIPIENT, value=0, nonce=0, gas_limit=21000, gas_price=1)
    sign_transaction(tx, TEST_PRIVATE_KEY)
    assert tx.v in (45, 46)


def test_typed_transactions_store_raw_recovery_id():
    eip2930 = build_transaction(
        chain_id=1, to=RECIPIENT, value=0, nonce=0, gas_limit=30000, gas_price=1,
        access_list=[{"address": TOKEN, "storage_keys": [SLOT_1]}],
    )
    eip1559 = build_transaction(
        chain_id=1, to=RECIPIENT, value=0, nonce=0, gas_limit=21000,
        max_fee_per_gas=30, max_priority_fee_per_gas=2,
    )
    for tx in (eip2930, eip1559):
        sign_transaction(tx, TEST_PRIVATE_KEY)
        assert tx.v in (0, 1)


def _oracle(tx_dict):
    return Account.sign_transaction(tx_dict, TEST_PRIVATE_KEY)


def _assert_matches(tx, signed):
    assert (tx.v, tx.r, tx.s) == (signed.v, signed.r, signed.s)
    assert transaction_hash(tx) == bytes(signed.hash)


def test_legacy_matches_eth_account():
    tx = build_transaction(
        chain_id=1, to=RECIPIENT, value=12345, nonce=7, gas_limit=50000, gas_price=3_000_000_000, data=b"hello"
    )
    sign_transaction(tx, TEST_PRIVATE_KEY)
    signed = _oracle({
        "chainId": 1,
        "nonce": 7,
        "gasPrice": 3_000_000_000,
        "gas": 50000,
        "to": RECIPIENT,
        "value": 12345,
        "data": b"hello",
    })
    _assert_matches(tx, signed)


def test_access_list_matches_eth_account():
    tx = build_transaction(
        chain_id=1, to=RECIPIENT, value=1, nonce=3, gas_limit=60000, gas_price=2_000_000_000,
        access_list=[{"address": TOKEN, "storage_keys": [SLOT_1, SLOT_2]}],
    )
    sign_transaction(tx, TEST_PRIVATE_KEY)
    signed = _oracle({
        "type": 1,
        "chainId": 1,
        "nonce": 3,
        "gasPrice": 2_000_000_000,
        "gas": 60000,
        "to": RECIPIENT,
        "value": 1,
        "data": b"",
        "accessList": [{"address": TOKEN, "storageKeys": [SLOT_1, SLOT_2]}],
    })
    _assert_matches(tx, signed)


def test_fee_market_matches_eth_account():
    tx = build_transaction(
        chain_id=137, to=RECIPIENT, value=10**18, nonce=11, gas_limit=21000,
        max_fee_per_gas=40_000_000_000, max_priority_fee_per_gas=1_500_000_000,
        access_list=[{"address": TOKEN, "storage_keys": [SLOT_2]}],
    )
    sign_transaction(tx, TEST_PRIVATE_KEY)
    signed = _oracle({
        "type": 2,
        "chainId": 137,
        "nonce": 11,
        "maxFeePerGas": 40_000_000_000,
        "maxPriorityFeePerGas": 1_500_000_000,
        "gas": 21000,
        "to": RECIPIENT,
        "value": 10**18,
        "data": b"",
        "accessList": [{"address": TOKEN, "storageKeys": [SLOT_2]}],
    })
    _assert_matches(tx, signed)


def test_invalid_key_raises_signing_error():
    tx = build_transaction(chain_id=1, to=RECIPIENT, value=0, nonce=0, gas_limit=21000, gas_price=1)
    with pytest.raises(SigningError):
        sign_transaction(tx, b"\xff" * 32)
    assert not tx.is_signed


def test_non_positive_chain_id_cannot_be_signed():
    tx = LegacyTransaction(chain_id=0, nonce=0, to=None, value=0, data=b"", gas_limit=21000, gas_price=1)
    with pytest.raises(SigningError):
        sign_transaction(tx, TEST_PRIVATE_KEY)
