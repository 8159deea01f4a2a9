"""Scaffolder -- plans, renders and writes the layered Dart sources.

Quick usage::

    from archgen.scaffolder import ArtifactPlanner, MergeWriter, TemplateRenderer

    artifacts = ArtifactPlanner().plan(schema, feature)
    writer = MergeWriter("./my_app")
    for artifact in TemplateRenderer().render_all(artifacts):
        writer.write_artifact(artifact)
"""

from archgen.scaffolder.models import Artifact, FeatureDescriptor, HTTPMethod, Layer
from archgen.scaffolder.planner import ArtifactPlanner
from archgen.scaffolder.templates import TemplateRenderer
from archgen.scaffolder.writer import MergeWriter, WriteError, WriteOutcome

__all__ = [
    "Artifact",
    "ArtifactPlanner",
    "FeatureDescriptor",
    "HTTPMethod",
    "Layer",
    "MergeWriter",
    "TemplateRenderer",
    "WriteError",
    "WriteOutcome",
]
