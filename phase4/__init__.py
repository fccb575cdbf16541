"""
phase4: Pauli phases as a number type

The cyclic group of order four, {1, i, -1, -i}, as an immutable value type
with closed multiplication and promotion to complex numbers.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Import core functionality
from .phase import *
from .promotion import promote_type
from . import functions

# Explicitly list main exports for clarity
__all__ = [
    # Core type
    'Phase', 'phase_from_factors', 'random_phases',

    # Numeric helpers
    'one', 'zero', 'iszero', 'inv', 'conj', 'flip_sign', 'in_range',
    'promote_type', 'functions',

    # Errors
    'Phase4Error', 'InvalidCode', 'NotARootOfUnity', 'DisallowedOperation',

    # Configuration
    'CODE_DTYPE'
]
