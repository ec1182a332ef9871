"""Project ID generation utility."""

import uuid


def generate_project_id() -> str:
    """Generate a project id.

    Returns:
        A UUID4 string like "3f2c9a1e-5b7d-4c1e-9a0f-2d6b8e4c7a10".
    """
    return str(uuid.uuid4())
