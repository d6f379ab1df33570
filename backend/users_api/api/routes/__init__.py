"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Routes never issue SQL directly (delegate to infrastructure/)
"""
