"""
Subscription data models.

Dataclasses for the camelCase payload of ``GET /user/subscription``.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ImageGenerationLimit:
    """Resolution and prompt limits of unlimited image generation."""
    resolution: int
    max_prompts: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ImageGenerationLimit':
        return cls(resolution=data.get('resolution', 0), max_prompts=data.get('maxPrompts', 0))


@dataclass
class Perks:
    """Subscription perks."""
    max_priority_actions: int = 0
    start_priority: int = 0
    context_tokens: int = 0
    module_training_steps: int = 0
    unlimited_max_priority: bool = False
    voice_generation: bool = False
    image_generation: bool = False
    unlimited_image_generation: bool = False
    unlimited_image_generation_limits: List[ImageGenerationLimit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Perks':
        return cls(
            max_priority_actions=data.get('maxPriorityActions', 0),
            start_priority=data.get('startPriority', 0),
            context_tokens=data.get('contextTokens', 0),
            module_training_steps=data.get('moduleTrainingSteps', 0),
            unlimited_max_priority=data.get('unlimitedMaxPriority', False),
            voice_generation=data.get('voiceGeneration', False),
            image_generation=data.get('imageGeneration', False),
            unlimited_image_generation=data.get('unlimitedImageGeneration', False),
            unlimited_image_generation_limits=[
                ImageGenerationLimit.from_dict(item)
                for item in data.get('unlimitedImageGenerationLimits') or []
            ],
        )


@dataclass
class PaymentProcessorData:
    """Opaque payment processor fields, kept under their wire names."""
    c: Optional[str] = None
    n: Optional[int] = None
    o: Optional[str] = None
    p: Optional[int] = None
    r: Optional[str] = None
    s: Optional[str] = None
    t: Optional[int] = None
    u: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PaymentProcessorData':
        return cls(**{key: data.get(key) for key in 'cnoprstu'})


@dataclass
class TrainingStepsLeft:
    fixed_training_steps_left: int = 0
    purchased_training_steps: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrainingStepsLeft':
        return cls(
            fixed_training_steps_left=data.get('fixedTrainingStepsLeft', 0),
            purchased_training_steps=data.get('purchasedTrainingSteps', 0),
        )


@dataclass
class Subscription:
    """
    Account subscription.

    Attributes:
        tier: Subscription tier (0 = paper)
        active: Whether the subscription is active
        expires_at: Expiry as a unix timestamp
        perks: Tier perks
        payment_processor_data: Processor details, if any
        training_steps_left: Remaining module training steps
    """
    tier: int
    active: bool
    expires_at: int
    perks: Perks = field(default_factory=Perks)
    payment_processor_data: Optional[PaymentProcessorData] = None
    training_steps_left: TrainingStepsLeft = field(default_factory=TrainingStepsLeft)

    @property
    def can_generate_images(self) -> bool:
        return self.active and self.perks.image_generation

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Subscription':
        processor = data.get('paymentProcessorData')
        return cls(
            tier=data.get('tier', 0),
            active=data.get('active', False),
            expires_at=data.get('expiresAt', 0),
            perks=Perks.from_dict(data.get('perks') or {}),
            payment_processor_data=PaymentProcessorData.from_dict(processor) if processor else None,
            training_steps_left=TrainingStepsLeft.from_dict(data.get('trainingStepsLeft') or {}),
        )
