"""Tests for ssh_config rendering."""

import pytest

from ssh_client_hardener.exceptions import ConfigurationError
from ssh_client_hardener.policy import resolve_policy
from ssh_client_hardener.renderer import ConfigRenderer

EXPECTED_DEFAULT = """\
# SSH Client Hardening Configuration
# DO NOT EDIT MANUALLY - Generated by ssh-client-hardener

Host *
    AddressFamily inet
    Protocol 2
    Port 22
    BatchMode no
    CheckHostIP yes
    StrictHostKeyChecking ask
    Ciphers aes128-ctr,aes256-ctr,aes192-ctr
    MACs hmac-sha2-256,hmac-sha2-512,hmac-ripemd160
    KexAlgorithms ecdh-sha2-nistp256,ecdh-sha2-nistp384,ecdh-sha2-nistp521,diffie-hellman-group-exchange-sha256
    ForwardAgent no
    ForwardX11 no
    HostbasedAuthentication no
    RhostsRSAAuthentication no
    RSAAuthentication yes
    PasswordAuthentication no
    GSSAPIAuthentication no
    GSSAPIDelegateCredentials no
    Tunnel no
    PermitLocalCommand no
    Compression yes
"""


def test_render_default_policy():
    """Test the full default configuration text."""
    assert ConfigRenderer().render(resolve_policy()) == EXPECTED_DEFAULT


def test_render_is_byte_identical(weak_policy):
    """Test identical tables render to identical bytes."""
    renderer = ConfigRenderer()
    first = renderer.render(resolve_policy(weak_policy)).encode()
    second = renderer.render(resolve_policy(weak_policy)).encode()
    assert first == second


def test_ports_render_as_repeated_lines(weak_policy):
    """Test Port is emitted once per port, in order."""
    lines = ConfigRenderer().render(resolve_policy(weak_policy)).splitlines()
    port_lines = [line.strip() for line in lines if line.strip().startswith("Port ")]
    assert port_lines == ["Port 22", "Port 2222"]


def test_weak_algorithms_render_comma_joined(weak_policy):
    """Test algorithm lists are comma-joined in preference order."""
    text = ConfigRenderer().render(resolve_policy(weak_policy))
    assert "    MACs hmac-sha2-256,hmac-sha2-512,hmac-ripemd160,hmac-sha1\n" in text
    assert "aes192-ctr,aes128-cbc,aes256-cbc,aes192-cbc\n" in text
    assert "    AddressFamily any\n" in text


def test_render_without_header():
    """Test the header can be omitted."""
    text = ConfigRenderer(host_pattern="*.example.com", header=False).render(resolve_policy())
    assert text.startswith("Host *.example.com\n")
    assert "#" not in text


@pytest.mark.parametrize("pattern", ["", "two words", "tab\there"])
def test_invalid_host_pattern(pattern):
    """Test host patterns must be a single token."""
    with pytest.raises(ConfigurationError):
        ConfigRenderer(host_pattern=pattern)


def test_empty_list_value_rejected():
    """Test a directive with no values cannot be rendered."""
    with pytest.raises(ConfigurationError):
        ConfigRenderer().render({"Ciphers": ()})
