"""Build the configured generation provider."""

from typing import Optional

from ..config.schema import StudioConfig
from ..core.abc import Logger, ScriptGenerator

def create_generator(config: StudioConfig, logger: Optional[Logger] = None) -> Optional[ScriptGenerator]:
    """
    Create the provider named in the config.

    Returns None when the provider cannot be configured (missing API key or
    SDK) so the service can answer with an "unconfigured" status instead of
    failing at startup.
    """
    gen = config.generation

    if gen.provider == "mock":
        from .mock_generator import create_mock_generator
        return create_mock_generator(default_count=config.limits.default_count)

    try:
        if gen.provider == "openai":
            from .openai_generator import OpenAIGenerator
            return OpenAIGenerator(model=gen.model, api_key_env=gen.api_key_env,
                                   max_retries=gen.max_retries, timeout=gen.timeout,
                                   logger=logger)

        from .gemini_generator import GeminiGenerator
        return GeminiGenerator(model=gen.model, endpoint=gen.endpoint, timeout=gen.timeout,
                               api_key_env=gen.api_key_env)

    except (ImportError, ValueError) as e:
        if logger:
            logger.warn("generator_unavailable", provider=gen.provider, error=str(e))
        return None

def create_generator_with_fallback(config: StudioConfig, logger: Optional[Logger] = None) -> ScriptGenerator:
    """Create the configured provider, falling back to the mock writer for offline use."""
    generator = create_generator(config, logger)
    if generator is not None:
        return generator

    from .mock_generator import create_mock_generator
    if logger:
        logger.warn("falling_back_to_mock_generator", provider=config.generation.provider)
    return create_mock_generator(default_count=config.limits.default_count)
