"""
Augmented Canvas Backend — API Routes Package
==============================================

Route Inventory:
    - prompt.py:        POST /api/prompt           (single or multi-node prompt)
    - study.py:         POST /api/questions        (study questions)
                        POST /api/flashcards       (flashcards + filename)
    - model_config.py:  GET/POST /api/model-config (ModelConfig pass-through)
    - health.py:        GET  /health               (service health check)

Routes stay thin: read the body and the X-OpenAI-Key header, call
CanvasService, render a ClassifiedError on failure.
"""
