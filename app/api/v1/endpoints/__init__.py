from . import (
    generate,
    health,
)
