"""Ad image synthesis."""

from rta.images.synthesizer import ImageSynthesizer, build_image_prompt, first_success, mood_for_tone

__all__ = ["ImageSynthesizer", "build_image_prompt", "first_success", "mood_for_tone"]
