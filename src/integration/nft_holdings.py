from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from addy.errors import UpstreamError, ValidationError
from addy.models import NftHoldings, NftToken

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_ADDRESS = "0x6847f4ef767fc976f9158a1d0de7cb60e1af4ebf"
DEFAULT_RPC_URL = "https://rpc.sepolia.mantle.xyz"
DEFAULT_EXPLORER_URL = "https://sepolia.mantlescan.xyz"
DEFAULT_IPFS_GATEWAY = "https://ipfs.io/ipfs/"

# balanceOf, tokenOfOwnerByIndex and tokenURI from ERC-721 + Enumerable
ERC721_ABI = [
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "tokenOfOwnerByIndex",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "index", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "tokenURI",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "tokenId", "type": "uint256"}],
        "outputs": [{"name": "", "type": "string"}],
    },
]


class TokenContract(ABC):
    @abstractmethod
    def balance_of(self, owner: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def token_of_owner_by_index(self, owner: str, index: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def token_uri(self, token_id: int) -> str:
        raise NotImplementedError


class Web3TokenContract(TokenContract):
    def __init__(self, contract_address: str, rpc_url: Optional[str] = None):
        rpc_url = rpc_url or os.getenv("NFT_RPC_URL", DEFAULT_RPC_URL)
        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": 30}))
        self.contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(contract_address), abi=ERC721_ABI
        )

    def _call(self, fn_name: str, *args) -> Any:
        try:
            return getattr(self.contract.functions, fn_name)(*args).call()
        except (Web3Exception, requests.RequestException) as e:
            raise UpstreamError(f"Chain RPC call {fn_name} failed: {e}") from e

    def balance_of(self, owner: str) -> int:
        return self._call("balanceOf", owner)

    def token_of_owner_by_index(self, owner: str, index: int) -> int:
        return self._call("tokenOfOwnerByIndex", owner, index)

    def token_uri(self, token_id: int) -> str:
        return self._call("tokenURI", token_id)


def resolve_token_uri(token_uri: str, gateway: str = DEFAULT_IPFS_GATEWAY) -> str:
    if token_uri.startswith("ipfs://"):
        return gateway + token_uri[len("ipfs://"):]
    return token_uri


def fetch_token_metadata(token_uri: str, timeout_s: float = 10.0) -> Optional[Any]:
    """Fetch token metadata JSON over HTTP(S) or an IPFS gateway.

    Returns None on failure; a token without readable metadata is still listed.
    """
    gateway = os.getenv("IPFS_GATEWAY", DEFAULT_IPFS_GATEWAY)
    try:
        resp = requests.get(resolve_token_uri(token_uri, gateway), timeout=timeout_s)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Metadata unavailable for {token_uri}: {e}")
        return None


class NftHoldingsReader:
    def __init__(
        self,
        contract: Optional[TokenContract] = None,
        contract_address: Optional[str] = None,
        explorer_url: Optional[str] = None,
        metadata_fetcher: Callable[[str], Optional[Any]] = fetch_token_metadata,
    ):
        self.contract_address = (
            contract_address or os.getenv("NFT_CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS)
        ).strip()
        self.explorer_url = (
            explorer_url or os.getenv("NFT_EXPLORER_URL", DEFAULT_EXPLORER_URL)
        ).strip().rstrip("/")
        self._contract = contract
        self.metadata_fetcher = metadata_fetcher

    @property
    def contract(self) -> TokenContract:
        if self._contract is None:
            self._contract = Web3TokenContract(self.contract_address)
        return self._contract

    def holdings(self, wallet_address: Optional[str]) -> NftHoldings:
        if not wallet_address or not wallet_address.strip():
            raise ValidationError("walletAddress query parameter is required")
        wallet_address = wallet_address.strip()
        if not Web3.is_address(wallet_address):
            raise ValidationError(f"walletAddress is not a valid address: {wallet_address}")

        owner = Web3.to_checksum_address(wallet_address)
        balance = int(self.contract.balance_of(owner))

        tokens = []
        for i in range(balance):
            token_id = self.contract.token_of_owner_by_index(owner, i)
            token_uri = self.contract.token_uri(token_id)
            tokens.append(
                NftToken(
                    token_id=str(token_id),
                    token_uri=token_uri,
                    metadata=self.metadata_fetcher(token_uri),
                )
            )

        logger.info(f"Wallet {owner} holds {balance} tokens of {self.contract_address}")
        return NftHoldings(
            wallet_address=wallet_address,
            contract_address=self.contract_address,
            balance=str(balance),
            tokens=tokens,
            explorer_url=f"{self.explorer_url}/address/{self.contract_address}",
        )
