"""
Unit tests for distinguished name comparison.
"""

from cryptography import x509
from cryptography.x509.oid import NameOID

from x509aux.config import settings
from x509aux.names import canonical_name, names_equal

from conftest import make_name


class TestNamesEqual:
    """Test structural name equality."""

    def test_identical(self):
        assert names_equal(make_name("Root"), make_name("Root"))

    def test_case_and_whitespace_folded(self):
        """Test case and whitespace runs are ignored."""
        assert names_equal(make_name("  Example   Root "), make_name("example root"))

    def test_different_values(self):
        assert not names_equal(make_name("Root A"), make_name("Root B"))

    def test_rdn_order_matters(self):
        """Test RDN sequence order is significant."""
        a = x509.Name([
            x509.NameAttribute(NameOID.COMMON_NAME, "Root"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example"),
        ])
        b = x509.Name([
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example"),
            x509.NameAttribute(NameOID.COMMON_NAME, "Root"),
        ])

        assert not names_equal(a, b)

    def test_multi_valued_rdn_order_ignored(self):
        """Test attribute order inside one RDN is not significant."""
        cn = x509.NameAttribute(NameOID.COMMON_NAME, "Root")
        org = x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example")
        a = x509.Name([x509.RelativeDistinguishedName([cn, org])])
        b = x509.Name([x509.RelativeDistinguishedName([org, cn])])

        assert names_equal(a, b)

    def test_exact_matching(self, monkeypatch):
        """Test canonical matching can be disabled."""
        monkeypatch.setattr(settings, "canonical_name_matching", False)

        assert not names_equal(make_name("Example Root"), make_name("example root"))
        assert names_equal(make_name("Example Root"), make_name("Example Root"))

    def test_none(self):
        assert names_equal(None, None)
        assert not names_equal(make_name("Root"), None)


class TestCanonicalName:
    """Test canonical form."""

    def test_one_entry_per_rdn(self):
        canonical = canonical_name(make_name("Root"))

        assert len(canonical) == 2
        assert ("2.5.4.3", "root") in canonical[0]
