# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import hashlib
import logging
import threading
from abc import ABC
from pathlib import Path
from typing import Any

import yaml
from omegaconf import DictConfig, ListConfig, OmegaConf

log = logging.getLogger(__name__)


class BaseModule(ABC):
    pass


class ModuleRegistry:
    """Process-wide registry of constraint classes and named constraints.

    Constraint classes are registered when their module is imported, and the
    named constraints are defined when `lockstep.modules` is imported. Named
    constraints are append-only: once defined, a name always resolves to the
    same immutable constraint.
    """
    _instance = None
    _modules = {}
    _named = {}
    _instances = {}
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ModuleRegistry, cls).__new__(cls)
        return cls._instance

    @classmethod
    def register(cls, module_class=None, *, name=None):
        """Register a module class with the registry.

        Can be used as a decorator:
            @ModuleRegistry.register
            class MyConstraint(Constraint):
                pass

        Or with a custom name:
            @ModuleRegistry.register(name="custom_name")
            class MyConstraint(Constraint):
                pass
        """
        def decorator(module_class):
            if not issubclass(module_class, BaseModule):
                raise TypeError(f"{module_class.__name__} is not a subclass of BaseModule")

            module_name = name or module_class.__name__
            cls._modules[module_name] = module_class
            return module_class

        if module_class is not None:
            return decorator(module_class)
        return decorator

    @classmethod
    def define(cls, name: str, module: BaseModule) -> BaseModule:
        """Define a named module. Names cannot be redefined."""
        if not isinstance(module, BaseModule):
            raise TypeError(f"{name} must name a BaseModule instance, got {type(module).__name__}")

        with cls._lock:
            if name in cls._named:
                raise ValueError(f"{name} is already defined")
            cls._named[name] = module

        log.debug(f"Defined {name} as {module!r}")
        return module

    @classmethod
    def get(cls, name: str) -> BaseModule:
        """Look up a named module."""
        try:
            return cls._named[name]
        except KeyError:
            raise KeyError(f"No module named {name} has been defined") from None

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls._named)

    @classmethod
    def instantiate(cls, config: Any, module_class: type[BaseModule] | None = None):
        """Instantiate a module from a configuration.

        Handles both simple configs and configs with nested modules.
        Supports direct class names, _target_ style configurations and
        `ref` entries that resolve a named module.
        """
        if isinstance(config, dict):
            config = OmegaConf.create(config)

        # Identical configs give the same (immutable) instance
        inst_id = hashlib.sha256(str(config).encode()).hexdigest()
        if inst_id in cls._instances:
            return cls._instances[inst_id]

        if isinstance(config, DictConfig) and "ref" in config and module_class is None:
            return cls.get(config["ref"])

        elif isinstance(config, DictConfig) and (
            any(key in config for key in ["name", "_target_"])
            or (module_class is not None)
        ):
            if module_class is None:
                module_name = config["_target_"].split(".")[-1] if "_target_" in config else config["name"]
                if module_name not in cls._modules:
                    raise ValueError(f"Module {module_name} not registered")

                module_class = cls._modules[module_name]

            # Process the rest of the config to instantiate dependencies
            kwargs = {}
            for key, value in config.items():
                if key not in ["name", "_target_", "args"]:
                    kwargs[key] = cls.instantiate(value)

            args = [cls.instantiate(arg) for arg in config.get("args", [])]

            instance = module_class(*args, **kwargs)

        # Handle lists or nested configs
        elif isinstance(config, ListConfig):
            return [cls.instantiate(item) for item in config]

        # Recurse into simple dicts
        elif isinstance(config, DictConfig):
            return {key: cls.instantiate(value) for key, value in config.items()}

        else:
            # This is a simple value, return it
            return config

        cls._instances[inst_id] = instance
        return instance

    @classmethod
    def load_config(cls, config_path):
        """Load a configuration from a YAML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'r') as f:
            config = yaml.safe_load(f)

        return config

    @classmethod
    def instantiate_from_yaml(cls, config_path, module_class: type[BaseModule] | None = None):
        """Load a configuration from a YAML file and instantiate it."""
        config = cls.load_config(config_path)
        return cls.instantiate(config, module_class=module_class)
