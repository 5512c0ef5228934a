# CLI implementation using Typer for profile creation, credential issuance and verification.
from __future__ import annotations

import base64
import json
import mimetypes
import string
from pathlib import Path
from typing import List, Optional

import click
import typer

from . import __version__
from .config import load_config
from .credentials.assertion import decode_unverified, verify_assertion
from .credentials.claims import CredentialType, accept_credential
from .credentials.issuance import Identity, issue_avatar_credential, issue_profile_details_credential
from .did import derive_did, public_key_from_did
from .logging import configure_logging
from .models import SocialLink, SocialPlatform
from .profile import clear_profile as clear_stored_profile
from .profile import create_profile as create_stored_profile
from .profile import get_current_profile
from .social import create_social_link
from .storage.profile_store import FileProfileStore
from .utils import b64d, b64e
from .utils.errors import CredentialRejected, DecodeError, InvalidDid, IrlError, MalformedAssertion, NoIdentity

app = typer.Typer(help="IRL onboarding: did:key identities and signed profile credentials")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"irl-onboarding {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH"),
    store: Optional[Path] = typer.Option(None, "--store", metavar="DIR", help="Profile store directory"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    app_config = load_config(config)
    configure_logging(app_config.logging.normalized_level())
    ctx.obj = FileProfileStore(store or app_config.storage.store_dir)


def _store() -> FileProfileStore:
    return click.get_current_context().obj


def _identity() -> Identity:
    try:
        return Identity.from_store(_store())
    except NoIdentity as exc:
        typer.echo(f"{exc} Run `irl-onboarding create-profile` first.", err=True)
        raise typer.Exit(code=1)
    except IrlError as exc:
        typer.echo(f"Stored identity is unusable: {exc}", err=True)
        raise typer.Exit(code=1)


def _parse_social(value: str) -> SocialLink:
    platform_name, sep, handle = value.partition(":")
    try:
        platform = SocialPlatform(platform_name.strip().upper())
    except ValueError:
        raise typer.BadParameter(f"Unknown platform {platform_name!r}") from None
    link = create_social_link(platform, handle) if sep else None
    if link is None:
        raise typer.BadParameter(f"Invalid {platform.value} handle: {handle!r}")
    return link


def _avatar_data_url(path: Path) -> str:
    raw = path.read_bytes()
    if raw.startswith(b"data:"):
        return raw.decode("ascii").strip()
    mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return f"data:{mime};base64,{base64.b64encode(raw).decode('ascii')}"


def _parse_public_key(value: str) -> bytes:
    value = value.strip()
    if len(value) == 64 and all(ch in string.hexdigits for ch in value):
        return bytes.fromhex(value)
    try:
        return b64d(value)
    except DecodeError:
        raise typer.BadParameter("Public key must be 64 hex characters or unpadded base64url") from None


@app.command("create-profile")
def create_profile(
    name: str = typer.Option(..., "--name", help="Display name"),
    social: List[str] = typer.Option([], "--social", help="PLATFORM:HANDLE, repeatable"),
    avatar: Optional[Path] = typer.Option(None, "--avatar", exists=True, readable=True, help="Image file or data URL"),
    force: bool = typer.Option(False, "--force", help="Replace an existing profile"),
):
    """Generate a new Ed25519 identity and save the profile"""
    store = _store()
    if store.has_profile() and not force:
        typer.echo("A profile already exists; pass --force to replace it", err=True)
        raise typer.Exit(code=1)
    socials = [_parse_social(item) for item in social]
    try:
        profile = create_stored_profile(store, name, socials, _avatar_data_url(avatar) if avatar else None)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from None
    typer.echo(profile.did)


@app.command("show-profile")
def show_profile():
    """Print the stored profile as JSON"""
    profile = get_current_profile(_store())
    if profile is None:
        typer.echo("No profile found", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(profile.to_dict(), indent=2, ensure_ascii=False))


@app.command("clear-profile")
def clear_profile(yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation")):
    """Delete the profile and its private key"""
    if not yes:
        typer.confirm("This permanently deletes the identity key. Continue?", abort=True)
    clear_stored_profile(_store())
    typer.echo("Profile cleared")


@app.command("did")
def did(public_key: str = typer.Argument(..., help="Ed25519 public key, hex or base64url")):
    """Derive the did:key for a public key"""
    try:
        typer.echo(derive_did(_parse_public_key(public_key)))
    except IrlError as exc:
        raise typer.BadParameter(str(exc)) from None


@app.command("issue-profile")
def issue_profile(audience: str = typer.Option(..., "--audience", help="Requesting origin, used as aud")):
    """Sign a profile details credential"""
    typer.echo(issue_profile_details_credential(_identity(), audience))


@app.command("issue-avatar")
def issue_avatar(audience: str = typer.Option(..., "--audience", help="Requesting origin, used as aud")):
    """Sign an avatar credential"""
    token = issue_avatar_credential(_identity(), audience)
    if token is None:
        typer.echo("Profile has no avatar", err=True)
        raise typer.Exit(code=1)
    typer.echo(token)


@app.command("verify")
def verify(
    token: str = typer.Argument(...),
    public_key: Optional[str] = typer.Option(None, "--public-key", help="hex or base64url"),
    did_value: Optional[str] = typer.Option(None, "--did", help="Issuer did:key"),
):
    """Check the signature only (claims such as exp are not evaluated)"""
    if bool(public_key) == bool(did_value):
        raise typer.BadParameter("Pass exactly one of --public-key or --did")
    if did_value:
        try:
            key = public_key_from_did(did_value)
        except InvalidDid as exc:
            raise typer.BadParameter(str(exc)) from None
    else:
        key = _parse_public_key(public_key)
    ok = verify_assertion(token, key)
    typer.echo("Verify OK" if ok else "Verify FAILED")
    raise typer.Exit(code=0 if ok else 2)


@app.command("decode")
def decode(token: str = typer.Argument(...)):
    """Show header and payload WITHOUT verifying the signature"""
    try:
        unverified = decode_unverified(token)
    except MalformedAssertion as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)
    typer.echo("warning: signature NOT verified", err=True)
    typer.echo(json.dumps(
        {"header": unverified.header, "payload": unverified.payload, "signature": b64e(unverified.signature)},
        indent=2,
        ensure_ascii=False,
    ))


@app.command("accept")
def accept(
    token: str = typer.Argument(...),
    audience: str = typer.Option(..., "--audience", help="Origin the credential must be addressed to"),
    credential_type: Optional[str] = typer.Option(None, "--type", help="irl:profile:details|irl:avatar"),
    leeway: int = typer.Option(0, "--leeway", min=0, help="Seconds of clock skew tolerated on exp"),
):
    """Verify against the issuer DID and check expiry, audience and type"""
    expected = None
    if credential_type:
        try:
            expected = CredentialType(credential_type)
        except ValueError:
            raise typer.BadParameter(f"Unknown credential type {credential_type!r}") from None
    try:
        claims = accept_credential(token, audience=audience, leeway=leeway, expected_type=expected)
    except CredentialRejected as exc:
        typer.echo(f"Rejected: {exc}", err=True)
        raise typer.Exit(code=2)
    typer.echo(json.dumps(claims, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
