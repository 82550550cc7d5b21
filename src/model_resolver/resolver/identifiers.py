"""
Identifier Policies

Whether a name can be used as a bare identifier in the generated code.
The rule depends on the target language, so it is looked up from a registry
instead of being hard-wired into the name resolver.
"""
from __future__ import annotations

import keyword
import threading
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, List, Type

from ..config import TargetLanguage
from ..utils.errors import ConfigurationError


class IdentifierPolicy(ABC):
    """Identifier rules of one target language"""

    language: TargetLanguage

    @abstractmethod
    def is_valid_identifier(self, name: str) -> bool:
        """True if ``name`` can be emitted as-is as an identifier"""


PolicyClass = Type[IdentifierPolicy]


class IdentifierPolicyRegistry:
    """Registry for identifier policies, keyed by target language"""

    _policies: Dict[TargetLanguage, PolicyClass] = {}
    _lock = threading.Lock()

    @classmethod
    def register(cls, language: TargetLanguage, policy_class: PolicyClass) -> None:
        with cls._lock:
            cls._policies[TargetLanguage(language)] = policy_class

    @classmethod
    def get_policy_class(cls, language: str) -> PolicyClass:
        try:
            key = TargetLanguage(language)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown target language: {language}",
                config_key="target_language",
                original_error=e,
            ) from e

        with cls._lock:
            if key not in cls._policies:
                raise ConfigurationError(
                    f"No identifier policy registered for language: {key.value}",
                    config_key="target_language",
                )
            return cls._policies[key]

    @classmethod
    def get_supported_languages(cls) -> List[TargetLanguage]:
        with cls._lock:
            return list(cls._policies.keys())


def register_identifier_policy(language: TargetLanguage):
    """Decorator to register an identifier policy class"""
    def decorator(cls: PolicyClass) -> PolicyClass:
        IdentifierPolicyRegistry.register(language, cls)
        return cls
    return decorator


@register_identifier_policy(TargetLanguage.CSHARP)
class CSharpIdentifierPolicy(IdentifierPolicy):
    language = TargetLanguage.CSHARP

    KEYWORDS: FrozenSet[str] = frozenset({
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
        "char", "checked", "class", "const", "continue", "decimal", "default",
        "delegate", "do", "double", "else", "enum", "event", "explicit",
        "extern", "false", "finally", "fixed", "float", "for", "foreach",
        "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
        "lock", "long", "namespace", "new", "null", "object", "operator",
        "out", "override", "params", "private", "protected", "public",
        "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
        "stackalloc", "static", "string", "struct", "switch", "this", "throw",
        "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
        "ushort", "using", "virtual", "void", "volatile", "while",
    })

    def is_valid_identifier(self, name: str) -> bool:
        return bool(name) and name.isidentifier() and name not in self.KEYWORDS


@register_identifier_policy(TargetLanguage.PYTHON)
class PythonIdentifierPolicy(IdentifierPolicy):
    language = TargetLanguage.PYTHON

    def is_valid_identifier(self, name: str) -> bool:
        return bool(name) and name.isidentifier() and not keyword.iskeyword(name)


def create_identifier_policy(language: str = TargetLanguage.CSHARP) -> IdentifierPolicy:
    """Create the identifier policy for a target language"""
    return IdentifierPolicyRegistry.get_policy_class(language)()
