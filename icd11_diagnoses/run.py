#!/usr/bin/env python3
"""
Interactive explorer for the ICD-11 MMS.

Usage:
    python -m icd11_diagnoses.run

Credentials are read from .env (ICD_CLIENT_ID, ICD_CLIENT_SECRET).
"""

from .client import ICD11Client, get_client
from .entities import Category, DiagnosisEntity, Diagnosis, Symptom
from .exceptions import DiagnosesSystemError
from .language import ICDLanguage


HELP = """
Commands:
  c <code>       - Get entity by ICD-11 code (e.g., 1A40.0)
  l [category]   - List a category's children (no id: chapters)
  s <query>      - Search for entities
  t <entity id>  - Get the title of an entity
  lang <code>    - Switch language (e.g., ru)
  help           - Show this help
  q              - Quit

Examples:
  c MG24.01      - Fear of breast cancer (a symptom)
  l 588616678    - Gastroenteritis or colitis of infectious origin
  s cholera      - Search for cholera
"""


def _kind(entity) -> str:
    if isinstance(entity, Category):
        return "category"
    if isinstance(entity, Symptom):
        return "symptom"
    if isinstance(entity, Diagnosis):
        return "diagnosis"
    return type(entity).__name__.lower()


def summarize_entity(entity, entity_id: str | None = None) -> None:
    """Print one line for an entity: title, code or id, and kind."""
    title = entity.title()
    if isinstance(entity, DiagnosisEntity):
        print(f"{title} [{entity.icd11_code}] ({_kind(entity)})")
    elif isinstance(entity, Category):
        print(f"{title} <{entity.system_code}> ({_kind(entity)})")
    else:
        print(title)
    if entity_id and not isinstance(entity, Category):
        print(f"  ID: {entity_id}")


def _print_listing(listing) -> None:
    print(f"Found {len(listing)} results:")
    for i, (entity, entity_id) in enumerate(listing, 1):
        print(f"  {i}. ", end="")
        summarize_entity(entity, entity_id)


def repl(client: ICD11Client) -> None:
    """
    Start an interactive exploration session.

    Commands:
        c <code>       - Get by ICD-11 code
        l [category]   - List category children
        s <query>      - Search
        t <entity id>  - Title by entity id
        lang <code>    - Switch language
        q              - Quit
    """
    print("ICD-11 Explorer")
    print("Commands: c <code>, l [category], s <query>, t <id>, lang <code>, q")
    print()

    while True:
        try:
            cmd = input(f"icd[{client.language.code}]> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not cmd:
            continue

        parts = cmd.split(maxsplit=1)
        action = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        try:
            if action == "q":
                break

            elif action == "c" and arg:
                summarize_entity(client.get_by_icd11_code(arg))

            elif action == "l":
                _print_listing(client.get_category_listing(arg))

            elif action == "s" and arg:
                _print_listing(client.search(arg))

            elif action == "t" and arg:
                print(client.get_title_by_entity_id(arg).title())

            elif action == "lang" and arg:
                client.set_language(ICDLanguage.by_code(arg))
                print(f"Language: {client.language.name.title()}")

            elif action == "help":
                print(HELP)

            else:
                print("Unknown command. Try: c, l, s, t, lang, help, q")

        except DiagnosesSystemError as e:
            print(f"Error: {e}")


def main():
    print("ICD-11 Explorer")
    try:
        client = get_client()
    except (DiagnosesSystemError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return

    print(f"Release: {client.release}")
    print("\nType 'help' for commands, 'q' to quit.\n")
    repl(client)


if __name__ == "__main__":
    main()
