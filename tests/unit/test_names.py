"""
Unit Tests for the Name Resolver
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from model_resolver.config import ResolverConfig
from model_resolver.resolver import NameResolver, PythonIdentifierPolicy
from model_resolver.schema import DataColumn, DataTable


@pytest.fixture
def resolver():
    return NameResolver()


class TestResolveAlias:
    """Tests for the full alias pipeline"""

    def test_underscore_prefix(self, resolver):
        """Test prefix before the first underscore is cut"""
        assert resolver.resolve_alias("tbl_user") == "User"

    def test_tbl_literal_prefix(self, resolver):
        """Test tbl literal prefix is cut"""
        assert resolver.resolve_alias("tbluser") == "User"

    def test_special_characters_removed(self, resolver):
        """Test brackets, dollar signs and spaces are deleted"""
        assert resolver.resolve_alias("Order Detail(s)") == "OrderDetails"
        assert resolver.resolve_alias("$price（元）") == "Price元"
        assert resolver.resolve_alias("Unit　Price") == "UnitPrice"

    def test_empty_names(self, resolver):
        """Test empty and missing names pass through"""
        assert resolver.resolve_alias("") == ""
        assert resolver.resolve_alias(None) is None

    @pytest.mark.parametrize("raw", [
        "tbl_user", "tbluser", "ISACTIVE", "isactive", "Order Detail(s)",
        "RoleID", "id", "UserName", "usertable",
    ])
    def test_idempotent(self, resolver, raw):
        """Test resolving an alias again changes nothing"""
        alias = resolver.resolve_alias(raw)
        assert resolver.resolve_alias(alias) == alias

    def test_custom_strip_characters(self):
        """Test configured characters are stripped"""
        resolver = NameResolver(config=ResolverConfig(strip_characters=["#"]))
        assert resolver.resolve_alias("Order#Total") == "OrderTotal"


class TestStripPrefix:
    """Tests for prefix stripping"""

    def test_first_underscore(self, resolver):
        assert resolver.strip_prefix("tbl_user") == "user"
        assert resolver.strip_prefix("sys_user_name") == "user_name"

    def test_short_suffix_kept(self, resolver):
        """Test at least two characters must follow the underscore"""
        assert resolver.strip_prefix("a_b") == "a_b"
        assert resolver.strip_prefix("a_bc") == "bc"

    def test_double_underscore_kept(self, resolver):
        assert resolver.strip_prefix("a__bc") == "a__bc"

    def test_reserved_suffix_kept(self, resolver):
        """Test a strip that would produce a keyword is skipped"""
        assert resolver.strip_prefix("x_class") == "x_class"
        assert resolver.strip_prefix("sys_item") == "sys_item"

    def test_table_literals(self, resolver):
        assert resolver.strip_prefix("tbluser") == "user"
        assert resolver.strip_prefix("tableuser") == "user"
        assert resolver.strip_prefix("usertable") == "user"
        assert resolver.strip_prefix("usertbl") == "user"

    def test_table_literal_case_sensitive(self, resolver):
        assert resolver.strip_prefix("TblUser") == "TblUser"

    def test_table_literal_reserved_kept(self, resolver):
        assert resolver.strip_prefix("tblitem") == "tblitem"

    def test_bare_literal_kept(self, resolver):
        """Test a name that is only the literal is not emptied"""
        assert resolver.strip_prefix("tbl") == "tbl"
        assert resolver.strip_prefix("table") == "table"

    def test_empty(self, resolver):
        assert resolver.strip_prefix("") == ""
        assert resolver.strip_prefix(None) is None


class TestNormalizeCase:
    """Tests for case normalization"""

    def test_id(self, resolver):
        assert resolver.normalize_case("ID") == "ID"
        assert resolver.normalize_case("id") == "ID"
        assert resolver.normalize_case("Id") == "ID"

    def test_is_prefix(self, resolver):
        assert resolver.normalize_case("isactive") == "IsActive"
        assert resolver.normalize_case("ISACTIVE") == "IsActive"

    def test_single_case_names(self, resolver):
        assert resolver.normalize_case("USERNAME") == "Username"
        assert resolver.normalize_case("username") == "Username"
        assert resolver.normalize_case("UId") == "Uid"

    def test_mixed_case_kept(self, resolver):
        assert resolver.normalize_case("UserName") == "UserName"
        assert resolver.normalize_case("userName") == "userName"

    def test_short_names_kept(self, resolver):
        assert resolver.normalize_case("ab") == "ab"
        assert resolver.normalize_case("X") == "X"

    def test_non_ascii_kept(self, resolver):
        assert resolver.normalize_case("用户名") == "用户名"

    def test_leading_digit(self, resolver):
        assert resolver.normalize_case("2NDNAME") == "2ndname"


class TestIsReservedIdentifier:
    """Tests for reserved identifier detection"""

    def test_item_any_case(self, resolver):
        assert resolver.is_reserved_identifier("item")
        assert resolver.is_reserved_identifier("Item")
        assert resolver.is_reserved_identifier("ITEM")

    def test_keywords(self, resolver):
        assert resolver.is_reserved_identifier("class")
        assert resolver.is_reserved_identifier("string")

    def test_uppercase_never_reserved(self, resolver):
        assert not resolver.is_reserved_identifier("Class")
        assert not resolver.is_reserved_identifier("2Name")

    def test_invalid_identifiers(self, resolver):
        assert resolver.is_reserved_identifier("1abc")
        assert resolver.is_reserved_identifier("first-name")

    def test_plain_names(self, resolver):
        assert not resolver.is_reserved_identifier("user")
        assert not resolver.is_reserved_identifier("order_id")
        assert not resolver.is_reserved_identifier("")

    def test_python_policy(self):
        """Test the keyword list follows the injected policy"""
        resolver = NameResolver(policy=PythonIdentifierPolicy())
        assert resolver.is_reserved_identifier("def")
        assert resolver.is_reserved_identifier("lambda")
        assert not resolver.is_reserved_identifier("string")
        assert resolver.is_reserved_identifier("item")


class TestGetDisplayName:
    """Tests for display name derivation"""

    def test_first_sentence(self, resolver):
        assert resolver.get_display_name("Name", "First sentence. Second sentence.") == "First sentence"

    def test_no_description(self, resolver):
        assert resolver.get_display_name("Name", "") == "Name"
        assert resolver.get_display_name("Name", None) == "Name"

    def test_full_width_period(self, resolver):
        assert resolver.get_display_name("Name", "  用户名称。详细说明") == "用户名称"

    def test_newline(self, resolver):
        assert resolver.get_display_name("Name", "Line one \r\nLine two") == "Line one"

    def test_leading_delimiter(self, resolver):
        """Test a delimiter in first position keeps the whole description"""
        assert resolver.get_display_name("Name", " .hidden start ") == ".hidden start"

    def test_no_delimiter(self, resolver):
        assert resolver.get_display_name("Name", " Plain description ") == "Plain description"


class TestResolveColumnAlias:
    """Tests for per-table column alias resolution"""

    def test_without_table(self, resolver):
        assert resolver.resolve_column_alias(DataColumn(name="tbl_user")) == "User"

    def test_no_collision(self, resolver):
        table = DataTable(name="User", columns=[
            DataColumn(name="ID", alias="ID"),
            DataColumn(name="USERNAME"),
        ])
        assert resolver.resolve_column_alias(table.columns[1]) == "Username"

    def test_collision_gets_suffix(self, resolver):
        table = DataTable(name="User", columns=[
            DataColumn(name="Name", alias="Name"),
            DataColumn(name="f_name"),
        ])
        assert resolver.resolve_column_alias(table.columns[1]) == "Name1"

    def test_collision_rescans_from_start(self, resolver):
        table = DataTable(name="User", columns=[
            DataColumn(name="Name", alias="Name"),
            DataColumn(name="Name1", alias="Name1"),
            DataColumn(name="x_name"),
        ])
        assert resolver.resolve_column_alias(table.columns[2]) == "Name2"

    def test_collision_case_insensitive(self, resolver):
        table = DataTable(name="User", columns=[
            DataColumn(name="NAME", alias="NAME"),
            DataColumn(name="f_name"),
        ])
        assert resolver.resolve_column_alias(table.columns[1]) == "Name1"

    def test_own_alias_ignored(self, resolver):
        table = DataTable(name="User", columns=[DataColumn(name="name", alias="Name")])
        assert resolver.resolve_column_alias(table.columns[0]) == "Name"

    def test_column_left_untouched(self, resolver):
        table = DataTable(name="User", columns=[
            DataColumn(name="Name", alias="Name"),
            DataColumn(name="f_name"),
        ])
        resolver.resolve_column_alias(table.columns[1])
        assert table.columns[1].alias is None
