"""
Augmented Canvas Backend — Services Layer
==========================================

What:  The shared core consumed by the HTTP routes, the plugin module and the
       worker module.

Service Inventory:
    - ConfigStore (config_store.py): live ModelConfig behind a read/write lock
    - CredentialResolver (credentials.py): per-call key → env variable → missing
    - AgentFactory (agent_factory.py): builds agents per provider
    - CompletionAgent (llm_base.py) / OpenAIAgent (openai_agent.py)
    - DefaultAgentHolder (default_agent.py): startup agent with explicit rebuild
    - normalize (normalizer.py): single/multi-node request → prompt text
    - CanvasService (canvas_service.py): generate, questions, flashcards
    - classify (error_classifier.py): exception → ClassifiedError
"""
