from augmented_canvas.models.model_config import (
    Flashcard,
    FlashcardsOutput,
    ModelConfig,
    ModelProvider,
    QuestionsOutput,
)

__all__ = [
    "Flashcard",
    "FlashcardsOutput",
    "ModelConfig",
    "ModelProvider",
    "QuestionsOutput",
]
