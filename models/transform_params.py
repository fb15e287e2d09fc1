"""Block transform run parameters."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TransformParams:
    """Settings for a forward/inverse block transform run."""
    
    block_size: int = 4
    max_workers: Optional[int] = None
    use_separable: bool = False
    
    def __post_init__(self):
        if not (1 <= self.block_size <= 64):
            raise ValueError(f"Block size must be 1-64, got {self.block_size}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @property
    def tile_size(self):
        return (self.block_size, self.block_size)
