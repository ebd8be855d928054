import json
import os
import sys

import pytest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from signing import MnemonicFileKeyProvider

# Hardhat/Anvil development mnemonic; account 0 is well known.
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TEST_PRIVATE_KEY = bytes.fromhex("ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80")


def write_account_file(path, mnemonic=TEST_MNEMONIC):
    path.write_text(json.dumps({"did": "did:example:123", "mnemonic": mnemonic, "public_key": "0x04"}))
    return path


@pytest.fixture
def account_file(tmp_path):
    return write_account_file(tmp_path / "Account.json")


@pytest.fixture
def key_provider(account_file):
    return MnemonicFileKeyProvider(account_file)
