"""
Dog

This module provides the dog entities, their repository, and the resolver
that embeds breed snapshots into dogs at read time.
"""

from kennel.dog.models import (
    UNRESOLVED_BREED,
    BreedRef,
    BreedView,
    Dog,
    DogCreate,
    DogQuery,
    DogUpdate,
    Gender,
    UnresolvedBreed,
)
from kennel.dog.repository import DogRepository
from kennel.dog.resolver import BreedResolver

__all__ = [
    "UNRESOLVED_BREED",
    "BreedRef",
    "BreedResolver",
    "BreedView",
    "Dog",
    "DogCreate",
    "DogQuery",
    "DogRepository",
    "DogUpdate",
    "Gender",
    "UnresolvedBreed",
]
