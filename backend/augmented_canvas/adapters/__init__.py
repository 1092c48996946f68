"""
Augmented Canvas Backend — Non-HTTP Adapters
=============================================

    - plugin.py: CanvasPluginModule + onload(host) for in-process hosts
    - worker.py: CanvasWorker, a queue-driven message adapter

Both share CanvasService with the HTTP routes, so credentials, configuration
and the error taxonomy behave identically on every surface.
"""
