"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from maze_runner.config import Settings, get_settings

# Type alias for cleaner route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
