"""Live gateway to the AaveDepositBorrow wrapper via web3.py."""

from __future__ import annotations

import logging
import time
from typing import Any

from aave_ops.data.constants import DEFAULT_POLL_INTERVAL
from aave_ops.data.contracts import ERC20_ABI, WRAPPER_ABI
from aave_ops.data.interfaces import (
    AccountSnapshot,
    LendingGateway,
    ReserveData,
    TxReceipt,
)
from aave_ops.errors import ConfigurationError, TransactionFailedError

logger = logging.getLogger(__name__)


class OnChainGateway(LendingGateway):
    """Web3-backed gateway that signs locally or through the node.

    Parameters
    ----------
    rpc_url : str
        JSON-RPC endpoint URL.
    contract_address : str | None
        Deployed wrapper contract. Only ``deploy_contract`` works without it.
    private_key : str | None
        Hex private key used to sign transactions. When omitted the node's
        first unlocked account sends them (Hardhat / Anvil style).
    tx_timeout : float | None
        Seconds to wait for a receipt; ``None`` keeps web3's default.
    poll_interval : float
        Seconds between block-number polls while waiting for confirmations.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str | None = None,
        private_key: str | None = None,
        tx_timeout: float | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        from web3 import Web3

        self._w3 = Web3(Web3.HTTPProvider(rpc_url))
        self._tx_timeout = tx_timeout
        self._poll_interval = poll_interval
        self._account = self._w3.eth.account.from_key(private_key) if private_key else None
        self._signer: str | None = self._account.address if self._account else None

        # No RPC calls here
        self._wrapper: Any = None
        self._contract_address: str | None = None
        if contract_address:
            self._contract_address = self._w3.to_checksum_address(contract_address)
            self._wrapper = self._w3.eth.contract(
                address=self._contract_address,
                abi=WRAPPER_ABI,
            )

        # Lazily built ERC-20 contract objects, keyed by checksummed address
        self._tokens: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _checksum(self, address: str) -> str:
        return self._w3.to_checksum_address(address)

    def _token(self, asset: str) -> Any:
        addr = self._checksum(asset)
        if addr not in self._tokens:
            self._tokens[addr] = self._w3.eth.contract(address=addr, abi=ERC20_ABI)
        return self._tokens[addr]

    def _require_wrapper(self) -> Any:
        if self._wrapper is None:
            raise ConfigurationError("No wrapper contract address configured")
        return self._wrapper

    def _transact(self, call: Any) -> str:
        """Sign and send a prepared contract call; return the tx hash."""
        sender = self.get_signer_address()
        if self._account is None:
            tx_hash = call.transact({"from": sender})
        else:
            tx = call.build_transaction(
                {
                    "from": sender,
                    "nonce": self._w3.eth.get_transaction_count(sender, "pending"),
                }
            )
            signed = self._account.sign_transaction(tx)
            tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        return self._w3.to_hex(tx_hash)

    # ------------------------------------------------------------------
    # Signer
    # ------------------------------------------------------------------

    def get_signer_address(self) -> str:
        if self._signer is None:
            accounts = self._w3.eth.accounts
            if not accounts:
                raise ConfigurationError(
                    "PRIVATE_KEY is not set and the node exposes no unlocked accounts"
                )
            self._signer = self._checksum(accounts[0])
        return self._signer

    def get_chain_id(self) -> int:
        return int(self._w3.eth.chain_id)

    # ------------------------------------------------------------------
    # ERC-20
    # ------------------------------------------------------------------

    def get_token_symbol(self, asset: str) -> str:
        return self._token(asset).functions.symbol().call()

    def get_token_decimals(self, asset: str) -> int:
        return int(self._token(asset).functions.decimals().call())

    def get_balance(self, asset: str, owner: str) -> int:
        return int(self._token(asset).functions.balanceOf(self._checksum(owner)).call())

    def get_allowance(self, asset: str, owner: str, spender: str) -> int:
        return int(
            self._token(asset)
            .functions.allowance(self._checksum(owner), self._checksum(spender))
            .call()
        )

    def approve(self, asset: str, spender: str, amount: int) -> str:
        call = self._token(asset).functions.approve(self._checksum(spender), amount)
        return self._transact(call)

    # ------------------------------------------------------------------
    # Wrapper contract
    # ------------------------------------------------------------------

    @property
    def contract_address(self) -> str:
        if self._contract_address is None:
            raise ConfigurationError("No wrapper contract address configured")
        return self._contract_address

    def deposit(self, asset: str, amount: int, on_behalf_of: str) -> str:
        call = self._require_wrapper().functions.deposit(
            self._checksum(asset), amount, self._checksum(on_behalf_of)
        )
        return self._transact(call)

    def borrow(
        self, asset: str, amount: int, interest_rate_mode: int, on_behalf_of: str
    ) -> str:
        call = self._require_wrapper().functions.borrow(
            self._checksum(asset), amount, interest_rate_mode, self._checksum(on_behalf_of)
        )
        return self._transact(call)

    def repay(
        self, asset: str, amount: int, interest_rate_mode: int, on_behalf_of: str
    ) -> str:
        call = self._require_wrapper().functions.repay(
            self._checksum(asset), amount, interest_rate_mode, self._checksum(on_behalf_of)
        )
        return self._transact(call)

    def withdraw(self, asset: str, amount: int, to: str) -> str:
        call = self._require_wrapper().functions.withdraw(
            self._checksum(asset), amount, self._checksum(to)
        )
        return self._transact(call)

    def get_user_account_data(self, user: str) -> AccountSnapshot:
        data = self._require_wrapper().functions.getUserAccountData(
            self._checksum(user)
        ).call()
        return AccountSnapshot.from_tuple(data)

    def get_reserve_data(self, asset: str) -> ReserveData:
        data = self._require_wrapper().functions.getReserveData(
            self._checksum(asset)
        ).call()
        return ReserveData.from_tuple(data)

    def get_asset_price(self, asset: str) -> int:
        return int(
            self._require_wrapper().functions.getAssetPrice(self._checksum(asset)).call()
        )

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def deploy_contract(self, abi: list[dict], bytecode: str, *args: Any) -> str:
        factory = self._w3.eth.contract(abi=abi, bytecode=bytecode)
        return self._transact(factory.constructor(*args))

    def wait_for_receipt(self, tx_hash: str, confirmations: int = 1) -> TxReceipt:
        kwargs: dict[str, Any] = {}
        if self._tx_timeout is not None:
            kwargs["timeout"] = self._tx_timeout
        receipt = self._w3.eth.wait_for_transaction_receipt(tx_hash, **kwargs)

        block_number = receipt["blockNumber"]
        if receipt["status"] != 1:
            raise TransactionFailedError(tx_hash, block_number)

        # The inclusion block counts as the first confirmation
        while self._w3.eth.block_number - block_number + 1 < confirmations:
            logger.debug(
                "Waiting for %d confirmations of %s (mined in block %d)",
                confirmations, tx_hash, block_number,
            )
            time.sleep(self._poll_interval)

        contract_address = receipt.get("contractAddress")
        return TxReceipt(
            transaction_hash=self._w3.to_hex(receipt["transactionHash"]),
            block_number=block_number,
            gas_used=receipt["gasUsed"],
            status=receipt["status"],
            contract_address=contract_address or None,
        )

    @property
    def is_connected(self) -> bool:
        """Whether the RPC endpoint answers; web3 reports failures as ``False``."""
        return bool(self._w3.is_connected())
