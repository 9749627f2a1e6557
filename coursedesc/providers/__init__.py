import pkgutil
import importlib
import inspect
import logging
from .base_provider import BaseProvider

logger = logging.getLogger(__name__)

# This dictionary will hold the map: 'university_of_bologna' -> UniversityOfBolognaProvider class
PROVIDER_REGISTRY = {}

def _register_providers():
    """
    Scans the current directory for modules, imports them,
    and looks for classes that inherit from BaseProvider.
    """
    # Look at the current folder (where this __init__.py is)
    package_path = __path__
    prefix = __name__ + "."

    # Iterate over all files in this folder, country folders included
    for _, name, _ in pkgutil.walk_packages(package_path, prefix):
        try:
            # Dynamically import the module (e.g., coursedesc.providers.Italy.university_of_bologna)
            module = importlib.import_module(name)
        except ImportError as e:
            logger.warning("Could not load provider from %s: %s", name, e)
            continue

        # Scan the module for classes
        for attribute_name, attribute_value in inspect.getmembers(module):
            # Check if it is a class, inherits from BaseProvider, and is not BaseProvider itself
            if (inspect.isclass(attribute_value) and issubclass(attribute_value, BaseProvider) and attribute_value is not BaseProvider):
                code = attribute_value.catalog_name
                if code:
                    PROVIDER_REGISTRY[code] = attribute_value

# As soon as we import the providers module, begin registering the providers
_register_providers()

def get_provider_class(catalog_name: str):
    return PROVIDER_REGISTRY.get(catalog_name)
