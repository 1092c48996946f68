"""
Augmented Canvas Backend — Application Package Initializer
===========================================================

What: Marks the `augmented_canvas` directory as a Python package.
Who:  Imported by uvicorn, pytest, and the plugin/worker adapters.

Architecture Note:
    One shared core consumed by three thin adapters:

    ┌──────────────┐ ┌──────────────────┐ ┌─────────────────┐
    │ HTTP (routes)│ │ Plugin module    │ │ Worker module   │
    └──────┬───────┘ └────────┬─────────┘ └────────┬────────┘
           └──────────────────┼────────────────────┘
                    ┌─────────▼──────────┐
                    │  CanvasService     │  ← resolve → normalize → complete → parse
                    ├────────────────────┤
                    │  ConfigStore       │  ← in-memory ModelConfig
                    │  DefaultAgentHolder│
                    └────────────────────┘

    Every adapter resolves credentials and configuration through the same
    service and reports failures with the same ClassifiedError taxonomy.
"""

__version__ = "0.1.0"
