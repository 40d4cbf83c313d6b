"""Infrastructure layer for the media catalog."""

from . import export
from . import repositories
