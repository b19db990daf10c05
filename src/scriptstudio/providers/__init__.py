"""
Script Studio Providers Package

This package contains generation providers for Script Studio. All providers
implement the ScriptGenerator protocol and are injected into the service.
"""

from .gemini_generator import GeminiGenerator
from .mock_generator import MockGenerator, create_mock_generator
from .factory import create_generator, create_generator_with_fallback

__all__ = [
    'GeminiGenerator',
    'MockGenerator',
    'create_mock_generator',
    'create_generator',
    'create_generator_with_fallback',
]
