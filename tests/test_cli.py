"""Tests for the signed-urls CLI."""

from click.testing import CliRunner

from signed_urls.cli import cli

GOLDEN_URL = (
    "/path?baz=qux&foo=bar"
    "&signature=25a3d00acee5bf7c1e71f0ce8addab046710221dbc12d0d1ce0a931a6c5f5add"
)


def _invoke(*args: str, env: dict[str, str] | None = None):
    return CliRunner().invoke(cli, list(args), obj={}, env=env)


def test_sign_matches_snapshot():
    """Test signing a URL with an explicit secret."""
    result = _invoke("--secret", "hunter2", "sign", "/path", "-p", "foo=bar", "-p", "baz=qux")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == GOLDEN_URL


def test_sign_reads_secret_from_environment():
    """Test signing with the secret from the environment."""
    result = _invoke("sign", "/path", "-p", "foo=bar", "-p", "baz=qux", env={"SIGNED_URLS_SECRET": "hunter2"})

    assert result.exit_code == 0, result.output
    assert result.output.strip() == GOLDEN_URL


def test_sign_output_is_only_the_url_with_debug_logging():
    """Test that log events never reach stdout alongside the URL."""
    result = _invoke(
        "--secret",
        "hunter2",
        "sign",
        "/path",
        "-p",
        "foo=bar",
        "-p",
        "baz=qux",
        env={"SIGNED_URLS_LOG_LEVEL": "DEBUG"},
    )

    assert result.exit_code == 0, result.output
    assert result.stdout.strip().splitlines() == [GOLDEN_URL]


def test_sign_escapes_reserved_characters():
    """Test that the printed URL verifies for values with query delimiters."""
    signed = _invoke("--secret", "hunter2", "sign", "/p", "-p", "q=a+b&c")
    assert signed.exit_code == 0, signed.output

    result = _invoke("--secret", "hunter2", "verify", signed.output.strip())

    assert result.exit_code == 0, result.output


def test_sign_without_secret_fails():
    """Test the error when no secret is configured."""
    result = _invoke("sign", "/path")

    assert result.exit_code == 1
    assert "Signing secret not configured" in result.output


def test_sign_rejects_malformed_param():
    """Test that parameters must be key=value."""
    result = _invoke("--secret", "hunter2", "sign", "/path", "-p", "novalue")

    assert result.exit_code == 2
    assert "key=value" in result.output


def test_sign_rejects_reserved_param():
    """Test that the signature key cannot be passed as a parameter."""
    result = _invoke("--secret", "hunter2", "sign", "/path", "-p", "signature=x")

    assert result.exit_code == 2


def test_verify_valid_url():
    """Test verifying a valid absolute URL."""
    result = _invoke("--secret", "hunter2", "verify", "https://example.com" + GOLDEN_URL)

    assert result.exit_code == 0
    assert "Signature is valid" in result.output


def test_verify_tampered_url():
    """Test verifying a URL with a changed value."""
    result = _invoke("--secret", "hunter2", "verify", GOLDEN_URL.replace("qux", "quux"))

    assert result.exit_code == 1
    assert "Invalid signature" in result.output


def test_verify_missing_signature():
    """Test verifying a URL without a signature."""
    result = _invoke("--secret", "hunter2", "verify", "/path?foo=bar")

    assert result.exit_code == 1
    assert "Missing signature" in result.output


def test_inspect_shows_canonical_form():
    """Test that inspect prints the signed canonical form."""
    result = _invoke("inspect", "/path?foo=bar&signature=abc&baz=qux")

    assert result.exit_code == 0, result.output
    assert "/path?baz=qux&foo=bar" in result.output
    assert "signature: abc" in result.output
