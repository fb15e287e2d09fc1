"""Block transform run result with metrics."""

from dataclasses import dataclass

from models.image import Image


@dataclass
class TransformResult:
    """Results from the forward/inverse block transform pipeline."""
    
    original_image: Image
    coefficients: Image
    reconstructed_image: Image
    
    # Quality metrics
    psnr: float
    max_error: float
    
    # Runtime
    forward_time_ms: float
    inverse_time_ms: float
    
    block_size: int = 4
