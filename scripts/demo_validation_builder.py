#!/usr/bin/env python3
"""
Quick demo script for the Validation JSON builder.

Infers a schema from a sample document, applies a few edits, prints the
generated Validation JSON and loads it back.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


SAMPLE = {
    "id": "8c1f2a5e-0000-4000-8000-000000000001",
    "email": "alice@example.com",
    "permissions": ["read", "write"],
    "roles": [{"name": "admin", "level": 3}],
    "audit": {"history": [{"action": "create", "at": "2024-01-01"}]},
}


def main():
    from validation_builder.session import BuilderSession

    print("=" * 70)
    print("DEMO: Validation JSON Builder")
    print("=" * 70)

    session = BuilderSession(type_name="User")
    session.analyze_value(SAMPLE)

    print("\n1. Inferred root fields:")
    for path, cfg in session.root_fields.items():
        suffix = f" -> {cfg.object_type}" if cfg.object_type else ""
        print(f"   {path:<22} {cfg.detected_type.value}{suffix}")

    print("\n2. Inferred object types:")
    for name in session.object_types:
        print(f"   {name}: {', '.join(session.object_types[name])}")

    session.add_pattern("email", "regex:^[^@\\s]+@[^@\\s]+$")
    session.update_root_field("email", pattern_key="email", max_length=254)
    session.update_object_type_field("Role", "level", required=False)

    text = session.generate_json()
    print("\n3. Generated Validation JSON:\n")
    print(text)

    reloaded = BuilderSession()
    reloaded.load(text)
    same = reloaded.generate() == session.generate()
    print(f"\n4. Reloaded type {reloaded.type_name!r}, round trip identical: {same}")


if __name__ == "__main__":
    main()
