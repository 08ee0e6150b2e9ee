"""
Domain models — Pydantic types for prettier-setup.

All models are re-exported here for convenient access:

    from prettier_setup.core.models import RegistryPackage, PendingTask, SetupSettings
"""

from prettier_setup.core.models.package import DEFAULT_VERSION, RegistryPackage
from prettier_setup.core.models.settings import SetupSettings
from prettier_setup.core.models.task import PendingTask, TaskReceipt
from prettier_setup.core.models.template import TemplateFile

__all__ = [
    # package.py
    "DEFAULT_VERSION",
    "RegistryPackage",
    # settings.py
    "SetupSettings",
    # task.py
    "PendingTask",
    "TaskReceipt",
    # template.py
    "TemplateFile",
]
