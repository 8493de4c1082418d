"""Input validation for CLI arguments."""
import re
import sys
from typing import Dict, List, Optional

SECRET_NAME_PATTERN = r'^[a-zA-Z0-9_-]+$'


def validate_secret_name(name: str) -> None:
    """
    Validate secret name matches GCP requirements.

    GCP Secret Manager allows only: [a-zA-Z0-9_-]

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: Secret name cannot be empty", file=sys.stderr)
        print("\nSecret names must match: [a-zA-Z0-9_-]", file=sys.stderr)
        sys.exit(2)

    if not re.match(SECRET_NAME_PATTERN, name):
        print(f"Error: Invalid secret name '{name}'", file=sys.stderr)
        print("\nAllowed characters: letters, numbers, underscores (_), hyphens (-)", file=sys.stderr)
        print("Not allowed: dots (.), spaces, special characters (@, $, !, etc.)", file=sys.stderr)
        sys.exit(2)


def validate_secret_value(value: str) -> None:
    """
    Validate secret value is not empty.

    Secret Manager does not allow empty secret payloads.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not value or value.strip() == "":
        print("Error: Secret value cannot be empty", file=sys.stderr)
        print("\nSecret Manager does not allow empty secret payloads.", file=sys.stderr)
        sys.exit(2)


def parse_headers(values: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse repeated ``Name: value`` header arguments.

    Raises:
        SystemExit with code 2 if a header has no colon or an empty name
    """
    headers = {}
    for value in values or []:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            print(f"Error: Invalid header '{value}'", file=sys.stderr)
            print("\nHeaders must look like: Content-Type: application/json", file=sys.stderr)
            sys.exit(2)
        headers[name.strip()] = content.strip()
    return headers
