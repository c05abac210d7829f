"""Ad copy and marketing copy generation."""

from rta.content.generator import apply_form_overrides, generate_content, parse_outputs

__all__ = ["apply_form_overrides", "generate_content", "parse_outputs"]
