"""
Breed

This module provides the breed taxonomy entities and their repository.
"""

from kennel.breed.models import Breed, BreedCreate, BreedQuery, BreedUpdate, Category
from kennel.breed.repository import BreedRepository

__all__ = [
    "Breed",
    "BreedCreate",
    "BreedQuery",
    "BreedRepository",
    "BreedUpdate",
    "Category",
]
