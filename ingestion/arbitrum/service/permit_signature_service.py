from typing import Any, Dict, NamedTuple, Tuple

from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from hexbytes import HexBytes
from web3 import AsyncWeb3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from abi.permit_abi import DAI_PERMIT_TOKEN_ABI, PERMIT_TOKEN_ABI

# A token without name() or nonces() surfaces as one of these
SIGNING_ERRORS = (BadFunctionCallOutput, ContractLogicError, OverflowError, ValueError)

EIP712_DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

PERMIT_FIELDS = [
    {"name": "owner", "type": "address"},
    {"name": "spender", "type": "address"},
    {"name": "value", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
]

DAI_PERMIT_FIELDS = [
    {"name": "holder", "type": "address"},
    {"name": "spender", "type": "address"},
    {"name": "nonce", "type": "uint256"},
    {"name": "expiry", "type": "uint256"},
    {"name": "allowed", "type": "bool"},
]


class Signature(NamedTuple):
    v: int
    r: bytes
    s: bytes


class PermitSignatureService(object):
    """
    Signs permit messages for a token with a throwaway owner key. Reads the
    token's name() and nonces(owner) from chain, nothing is ever sent.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        owner: LocalAccount,
        spender: str,
        chain_id: int,
        value: int,
        deadline: int,
    ):
        self._web3 = web3
        self.owner = owner
        self.spender = to_checksum_address(spender)
        self.chain_id = chain_id
        self.value = value
        self.deadline = deadline
        self._permit_encoder = web3.eth.contract(abi=PERMIT_TOKEN_ABI)
        self._dai_permit_encoder = web3.eth.contract(abi=DAI_PERMIT_TOKEN_ABI)

    def _token_contract(self, token_address: str):
        return self._web3.eth.contract(address=to_checksum_address(token_address), abi=PERMIT_TOKEN_ABI)

    async def get_token_name(self, token_address: str) -> str:
        return await self._token_contract(token_address).functions.name().call()

    async def get_nonce(self, token_address: str) -> int:
        return await self._token_contract(token_address).functions.nonces(self.owner.address).call()

    def _domain(self, name: str, token_address: str, include_version: bool) -> Tuple[Dict[str, Any], list]:
        domain: Dict[str, Any] = {"name": name}
        fields = [EIP712_DOMAIN_FIELDS[0]]
        if include_version:
            domain["version"] = "1"
            fields.append(EIP712_DOMAIN_FIELDS[1])
        domain["chainId"] = self.chain_id
        domain["verifyingContract"] = to_checksum_address(token_address)
        fields.extend(EIP712_DOMAIN_FIELDS[2:])
        return domain, fields

    def _sign(self, domain: Dict[str, Any], domain_fields: list, permit_fields: list, message: Dict[str, Any]) -> Signature:
        typed_data = {
            "types": {"EIP712Domain": domain_fields, "Permit": permit_fields},
            "primaryType": "Permit",
            "domain": domain,
            "message": message,
        }
        signed = self.owner.sign_message(encode_typed_data(full_message=typed_data))
        return Signature(v=signed.v, r=signed.r.to_bytes(32, "big"), s=signed.s.to_bytes(32, "big"))

    async def sign_permit(self, token_address: str, include_version: bool = True) -> Signature:
        """EIP-2612 permit, with or without version "1" in the domain."""
        name = await self.get_token_name(token_address)
        nonce = await self.get_nonce(token_address)
        domain, domain_fields = self._domain(name, token_address, include_version)
        message = {
            "owner": self.owner.address,
            "spender": self.spender,
            "value": self.value,
            "nonce": nonce,
            "deadline": self.deadline,
        }
        return self._sign(domain, domain_fields, PERMIT_FIELDS, message)

    async def sign_dai_permit(self, token_address: str) -> Tuple[Signature, int]:
        """DAI style permit. Returns the nonce too, it is part of the calldata."""
        name = await self.get_token_name(token_address)
        nonce = await self.get_nonce(token_address)
        domain, domain_fields = self._domain(name, token_address, include_version=True)
        message = {
            "holder": self.owner.address,
            "spender": self.spender,
            "nonce": nonce,
            "expiry": self.deadline,
            "allowed": True,
        }
        return self._sign(domain, domain_fields, DAI_PERMIT_FIELDS, message), nonce

    def encode_permit_call(self, signature: Signature) -> bytes:
        return HexBytes(
            self._permit_encoder.encode_abi(
                "permit",
                args=[self.owner.address, self.spender, self.value, self.deadline, signature.v, signature.r, signature.s],
            )
        )

    def encode_dai_permit_call(self, signature: Signature, nonce: int) -> bytes:
        return HexBytes(
            self._dai_permit_encoder.encode_abi(
                "permit",
                args=[self.owner.address, self.spender, nonce, self.deadline, True, signature.v, signature.r, signature.s],
            )
        )

    async def build_permit_calls(self, token_address: str) -> Tuple[bytes, bytes, bytes]:
        """
        Calldata for the three permit shapes, in probe priority order:
        version, no version, dai.
        """
        with_version = await self.sign_permit(token_address, include_version=True)
        without_version = await self.sign_permit(token_address, include_version=False)
        dai_signature, dai_nonce = await self.sign_dai_permit(token_address)
        return (
            self.encode_permit_call(with_version),
            self.encode_permit_call(without_version),
            self.encode_dai_permit_call(dai_signature, dai_nonce),
        )
