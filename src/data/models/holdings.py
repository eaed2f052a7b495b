"""Balance snapshot models."""

from dataclasses import dataclass
from typing import Any

from src.data.models.enums import InputContractError


@dataclass(frozen=True)
class ChainBalance:
    """USD value of one token held on one chain.

    Attributes:
        chain_id: Chain the balance lives on (e.g. 42220 for Celo).
        symbol: Token symbol as reported by the balance reader.
        value_usd: Position value in USD.
    """

    chain_id: int
    symbol: str
    value_usd: float

    def __post_init__(self) -> None:
        if self.value_usd < 0:
            raise InputContractError(
                f"Negative balance for {self.symbol} on chain {self.chain_id}: {self.value_usd}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChainBalance":
        """Create instance from dictionary.

        Accepts ``value_usd`` or ``value`` and ``chain_id`` or ``chainId``.
        """
        value = data["value_usd"] if "value_usd" in data else data.get("value", 0.0)
        chain_id = data["chain_id"] if "chain_id" in data else data.get("chainId", 0)
        return cls(
            chain_id=int(chain_id),
            symbol=str(data["symbol"]),
            value_usd=float(value),
        )


def balances_from_chains(chains: list[dict[str, Any]]) -> list[ChainBalance]:
    """Flatten a per-chain balance payload.

    Expected shape (one entry per chain)::

        [{"chain_id": 42220, "balances": [{"symbol": "KESm", "value": 500.5}]}]
    """
    balances: list[ChainBalance] = []
    for chain in chains:
        chain_id = chain["chain_id"] if "chain_id" in chain else chain.get("chainId", 0)
        for entry in chain.get("balances", []):
            balances.append(
                ChainBalance.from_dict({**entry, "chain_id": chain_id})
            )
    return balances
