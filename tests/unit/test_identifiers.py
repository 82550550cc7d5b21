"""
Unit Tests for Identifier Policies
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from model_resolver.config import TargetLanguage
from model_resolver.resolver import (
    CSharpIdentifierPolicy,
    IdentifierPolicy,
    IdentifierPolicyRegistry,
    PythonIdentifierPolicy,
    create_identifier_policy,
    register_identifier_policy,
)
from model_resolver.utils import ConfigurationError


class TestCSharpIdentifierPolicy:
    """Tests for C# identifier rules"""

    def test_valid_identifiers(self):
        policy = CSharpIdentifierPolicy()
        assert policy.is_valid_identifier("user")
        assert policy.is_valid_identifier("_id")
        assert policy.is_valid_identifier("用户")

    def test_keywords_rejected(self):
        policy = CSharpIdentifierPolicy()
        for name in ["class", "namespace", "int", "event", "params"]:
            assert not policy.is_valid_identifier(name)

    def test_malformed_rejected(self):
        policy = CSharpIdentifierPolicy()
        assert not policy.is_valid_identifier("")
        assert not policy.is_valid_identifier("9lives")
        assert not policy.is_valid_identifier("first name")


class TestPythonIdentifierPolicy:
    """Tests for Python identifier rules"""

    def test_keywords_rejected(self):
        policy = PythonIdentifierPolicy()
        assert not policy.is_valid_identifier("def")
        assert not policy.is_valid_identifier("None")

    def test_csharp_keywords_allowed(self):
        policy = PythonIdentifierPolicy()
        assert policy.is_valid_identifier("namespace")
        assert policy.is_valid_identifier("string")


class TestIdentifierPolicyRegistry:
    """Tests for policy lookup"""

    def test_builtin_languages(self):
        languages = IdentifierPolicyRegistry.get_supported_languages()
        assert TargetLanguage.CSHARP in languages
        assert TargetLanguage.PYTHON in languages

    def test_create_by_name(self):
        assert isinstance(create_identifier_policy("csharp"), CSharpIdentifierPolicy)
        assert isinstance(create_identifier_policy("python"), PythonIdentifierPolicy)
        assert isinstance(create_identifier_policy(TargetLanguage.PYTHON), PythonIdentifierPolicy)

    def test_default_is_csharp(self):
        assert isinstance(create_identifier_policy(), CSharpIdentifierPolicy)

    def test_unknown_language(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_identifier_policy("cobol")

        assert exc_info.value.config_key == "target_language"

    def test_register_replaces_policy(self):
        """Test the decorator registers a policy for a language"""
        original = IdentifierPolicyRegistry.get_policy_class(TargetLanguage.PYTHON)
        try:
            @register_identifier_policy(TargetLanguage.PYTHON)
            class StrictPolicy(IdentifierPolicy):
                language = TargetLanguage.PYTHON

                def is_valid_identifier(self, name):
                    return name.isidentifier() and name.islower()

            assert isinstance(create_identifier_policy("python"), StrictPolicy)
        finally:
            IdentifierPolicyRegistry.register(TargetLanguage.PYTHON, original)
