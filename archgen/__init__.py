"""Clean architecture generator.

Generates the data and domain layers of a Flutter feature from one sample
response of a REST endpoint.

Quick usage::

    from archgen import GenerationPipeline, GeneratorConfig

    config = GeneratorConfig(output_dir="./my_app", assume_yes=True)
    result = await GenerationPipeline(config).run("/api/users/profile", "GET")
"""

from archgen.config import GeneratorConfig
from archgen.pipeline import GenerationPipeline, RunResult

__all__ = [
    "GenerationPipeline",
    "GeneratorConfig",
    "RunResult",
]
