
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Tuple

from nft_rarity.core.constants import DISPLAY_DEFAULTS

# trait_type -> value -> count
TraitCounts = Dict[str, Dict[str, int]]

@dataclass(frozen=True)
class Attribute:
    trait_type: str
    value: Optional[str]  # None when the upstream description lacked it

    @property
    def display_value(self) -> Optional[str]:
        if self.value is not None:
            return self.value
        return DISPLAY_DEFAULTS.get(self.trait_type)

@dataclass(frozen=True)
class RarityComponent:
    trait_type: str
    value: Optional[str]
    ic: float
    frequency: int
    total: int

@dataclass(frozen=True)
class RarityResult:
    score: float       # [0, 100], one decimal
    percentile: int
    tier: str          # S | A | B | C | D
    mode: str          # 'collection' | 'single_token'
    components: Tuple[RarityComponent, ...] = ()

    def to_dict(self) -> Dict:
        return asdict(self)

@dataclass(frozen=True)
class Token:
    token_id: str
    attributes: Tuple[Attribute, ...]
    name: Optional[str] = None
    image: Optional[str] = None
    minted_at: Optional[str] = None
    rarity: Optional[RarityResult] = None

    def to_dict(self) -> Dict:
        return {
            "tokenId": self.token_id,
            "name": self.name,
            "image": self.image,
            "mintedAt": self.minted_at,
            "attributes": [
                {"trait_type": a.trait_type, "value": a.display_value} for a in self.attributes
            ],
            "rarity": self.rarity.to_dict() if self.rarity else None,
        }

@dataclass(frozen=True)
class RaritySnapshot:
    """One complete refresh result. Replaced as a whole, never edited."""
    tokens: Tuple[Token, ...]
    trait_counts: TraitCounts
    total_minted: int
    calculated_at: str
    by_id: Dict[str, Token] = field(default_factory=dict, compare=False)

    @classmethod
    def build(cls, tokens, trait_counts: TraitCounts, calculated_at: str) -> "RaritySnapshot":
        tokens = tuple(tokens)
        return cls(
            tokens=tokens,
            trait_counts=trait_counts,
            total_minted=len(tokens),
            calculated_at=calculated_at,
            by_id={t.token_id: t for t in tokens},
        )

    def get(self, token_id: str) -> Optional[Token]:
        return self.by_id.get(token_id)

    def to_dict(self) -> Dict:
        return {
            "tokens": [t.to_dict() for t in self.tokens],
            "traitCounts": self.trait_counts,
            "totalMinted": self.total_minted,
            "calculatedAt": self.calculated_at,
        }

def make_attributes(pairs: List[Tuple[str, Optional[str]]]) -> Tuple[Attribute, ...]:
    return tuple(Attribute(trait_type=t, value=v) for t, v in pairs)
