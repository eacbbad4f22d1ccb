import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .errors import InvalidModulusError
from .modarith import is_u64, modexp

logger = logging.getLogger(__name__)

DEFAULT_CAP = 5000


@dataclass(frozen=True)
class Sequence:
    """Residues base^1 .. base^k mod modulus, stopped before the first repeat.

    ``tail_length`` is the position where ``repeat_value`` first appeared, so
    ``residues[tail_length:]`` is one full cycle and ``residues[:tail_length]``
    is the pre-periodic tail (empty when base is coprime to modulus).
    """
    base: int
    modulus: int
    residues: Tuple[int, ...]
    capped: bool = False
    repeat_value: Optional[int] = None
    tail_length: int = 0

    def __len__(self) -> int:
        return len(self.residues)

    def __iter__(self) -> Iterator[int]:
        return iter(self.residues)

    def __getitem__(self, i):
        return self.residues[i]

    @property
    def period(self) -> int:
        return len(self.residues) - self.tail_length

    @property
    def is_purely_periodic(self) -> bool:
        return not self.capped and self.tail_length == 0

    def terms(self) -> Iterator[Tuple[int, int]]:
        for i, v in enumerate(self.residues, start=1):
            yield i, v


def generate(base: int, modulus: int, cap: int = DEFAULT_CAP) -> Sequence:
    if not is_u64(modulus) or modulus == 0:
        raise InvalidModulusError(modulus)
    if not is_u64(base):
        raise ValueError(f"base must be an unsigned 64-bit integer, got {base!r}")
    if cap < 1:
        raise ValueError(f"cap must be >= 1, got {cap}")

    seen = {}  # residue -> position
    residues = []
    repeat = None
    i = 1
    while len(residues) < cap:
        v = modexp(base, i, modulus)
        if v in seen:
            repeat = v
            break
        seen[v] = len(residues)
        residues.append(v)
        i += 1

    capped = repeat is None
    if capped:
        logger.warning("sequence %d^n mod %d hit the safety cap of %d terms", base, modulus, cap)
    tail = seen[repeat] if repeat is not None else 0
    seq = Sequence(base=base, modulus=modulus, residues=tuple(residues),
                   capped=capped, repeat_value=repeat, tail_length=tail)
    logger.debug("generated %d^n mod %d: %d terms, tail=%d, period=%d",
                 base, modulus, len(seq), seq.tail_length, seq.period)
    return seq
