"""Seed initial breeds into the database."""
from kennel.breed import BreedCreate, BreedQuery, BreedRepository, Category

INITIAL_BREEDS = [
    {"category": Category.SMALL, "name": "Chihuahua"},
    {"category": Category.SMALL, "name": "Pomeranian"},
    {"category": Category.MEDIUM, "name": "Shiba Inu"},
    {"category": Category.MEDIUM, "name": "Border Collie"},
    {"category": Category.LARGE, "name": "Golden Retriever"},
    {"category": Category.LARGE, "name": "Labrador Retriever"},
    {"category": Category.GIANT, "name": "Great Dane"},
    {"category": Category.GIANT, "name": "Saint Bernard"},
]


def main():
    breeds_repo = BreedRepository()

    for breed in INITIAL_BREEDS:
        existing = breeds_repo.query(BreedQuery(category_eq=breed["category"])).items
        if any(b.name == breed["name"] for b in existing):
            print(f"Skipping {breed['name']} - already exists")
            continue

        breed_id = breeds_repo.create(BreedCreate(**breed))
        print(f"Created: {breed['name']} (id={breed_id})")


if __name__ == "__main__":
    main()
