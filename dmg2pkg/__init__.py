"""dmg2pkg: turn downloaded macOS disk images into installer packages.

Core design goals:
- One linear pipeline per entry (fetch, verify, mount, package, catalog)
- Fallback conversion when the primary package build fails
- Cleanup guaranteed on every exit path
- External tools wrapped behind small typed services
- Centralized logging
"""

__all__ = []

__version__ = "1.0.0"
