#!/usr/bin/env python3
"""Kennel CLI for catalog maintenance."""

import argparse

import questionary
from rich.console import Console

from kennel import db
from kennel.breed import BreedCreate, BreedQuery, Category
from kennel.dog import DogQuery
from kennel.errors import KennelError
from kennel.repository import CatalogRepository

console = Console()


def init_db():
    """Create the indexes the catalog relies on."""
    db.ensure_indexes()
    console.print("[green]Indexes ready.[/]")


def add_breed(repo: CatalogRepository):
    """Prompt for a category and a name, then create the breed."""
    category = questionary.select(
        "Select a category:",
        choices=[questionary.Choice(title=c.value, value=c) for c in Category],
    ).ask()
    # User pressed Ctrl+C or Escape
    if category is None:
        console.print("[dim]Cancelled.[/]")
        return

    name = questionary.text("Breed name:").ask()
    if not name:
        console.print("[dim]Cancelled.[/]")
        return

    if not questionary.confirm(f"Create {category.value} breed '{name}'?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    breed_id = repo.create_breed(BreedCreate(category=category, name=name))
    console.print(f"[green]Created breed {name} (id={breed_id}).[/]")


def list_breeds(repo: CatalogRepository, category: str | None = None):
    """Print every breed, optionally of one category."""
    query = BreedQuery(category_eq=Category(category) if category else None)
    page = repo.query_breeds(query)
    if not page.items:
        console.print("[red]No breeds found.[/]")
        return
    for breed in page.items:
        console.print(f"{breed.id}  [bold]{breed.name}[/] ({breed.category.value})")
    console.print(f"[dim]{page.total} breed(s)[/]")


def list_dogs(repo: CatalogRepository, owner_id: str):
    """Print every dog of an owner with its breed."""
    page = repo.query_dogs(DogQuery(owner_id_eq=owner_id))
    if not page.items:
        console.print(f"[red]No dogs found for {owner_id}.[/]")
        return
    for dog in page.items:
        breed = dog.breed.name if dog.breed_resolved else "[yellow]unknown breed[/]"
        console.print(f"{dog.id}  [bold]{dog.name}[/] {breed}, born {dog.birthday}")
    console.print(f"[dim]{page.total} dog(s)[/]")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Kennel CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create catalog indexes")
    subparsers.add_parser("add-breed", help="Create a breed interactively")
    breeds_parser = subparsers.add_parser("list-breeds", help="List breeds")
    breeds_parser.add_argument("--category", choices=[c.value for c in Category])
    dogs_parser = subparsers.add_parser("list-dogs", help="List an owner's dogs")
    dogs_parser.add_argument("--owner", required=True)

    args = parser.parse_args(argv)
    repo = CatalogRepository()

    try:
        if args.command == "init-db":
            init_db()
        elif args.command == "add-breed":
            add_breed(repo)
        elif args.command == "list-breeds":
            list_breeds(repo, args.category)
        elif args.command == "list-dogs":
            list_dogs(repo, args.owner)
    except KennelError as e:
        console.print(f"[red]{e}[/]")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
