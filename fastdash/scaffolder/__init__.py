"""Fast Dashboard scaffolder -- generates and extends dashboard projects.

Quick usage::

    from fastdash.scaffolder import FeatureGenerator, ProjectDescriptor, ProjectGenerator

    descriptor = ProjectDescriptor.from_input("my-dashboard", width="1280", height="800")
    report = ProjectGenerator().generate(descriptor, "/tmp/output")

    features = FeatureGenerator(report.root)
    features.add_feature("widget", "My Clock")
"""

from fastdash.scaffolder.features import FeatureGenerator
from fastdash.scaffolder.generator import (
    ProjectDescriptor,
    ProjectGenerator,
    read_module_name,
    validate_project_name,
)
from fastdash.scaffolder.materializer import FileMaterializer
from fastdash.scaffolder.naming import derive_identifiers, derive_module_name
from fastdash.scaffolder.patcher import MarkerPatcher
from fastdash.scaffolder.templates import TemplateRenderer

__all__ = [
    "FeatureGenerator",
    "FileMaterializer",
    "MarkerPatcher",
    "ProjectDescriptor",
    "ProjectGenerator",
    "TemplateRenderer",
    "derive_identifiers",
    "derive_module_name",
    "read_module_name",
    "validate_project_name",
]
