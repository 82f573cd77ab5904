from __future__ import annotations
import logging
import ssl
from typing import Any, Optional, Tuple

from .models import CertificatePolicy

log = logging.getLogger("http_facade.tls")


def peer_chain(tls_sock: Any) -> Tuple[bytes, Tuple[bytes, ...]]:
    """Return the peer's DER certificate and the chain it presented."""
    leaf = tls_sock.getpeercert(binary_form=True) or b""
    # get_unverified_chain is only available on Python 3.13+
    get_chain = getattr(tls_sock, "get_unverified_chain", None)
    chain = tuple(get_chain() or ()) if get_chain else ()
    return leaf, chain or ((leaf,) if leaf else ())


def apply_policy(policy: CertificatePolicy, tls_sock: Any, server_hostname: Optional[str] = None) -> None:
    """Ask the policy about an established TLS session; raise to abort the handshake."""
    leaf, chain = peer_chain(tls_sock)
    errors: Tuple[str, ...] = () if leaf else ("peer presented no certificate",)
    if policy(leaf, chain, errors):
        log.debug("Certificate for %s accepted by policy", server_hostname or "-")
        return
    log.debug("Certificate for %s rejected by policy", server_hostname or "-")
    raise ssl.SSLCertVerificationError(f"certificate for {server_hostname or 'peer'} rejected by validation policy")


class PolicySSLContext(ssl.SSLContext):
    """
    Client context that hands the acceptance decision to a certificate policy.

    The handshake runs without platform verification; once the session is up the
    policy sees the peer certificate and chain, and a False verdict closes the
    socket and raises ssl.SSLCertVerificationError.
    """

    policy: Optional[CertificatePolicy] = None

    def wrap_socket(self, sock: Any, *args: Any, **kwargs: Any) -> ssl.SSLSocket:
        tls_sock = super().wrap_socket(sock, *args, **kwargs)
        if self.policy is None:
            return tls_sock
        try:
            apply_policy(self.policy, tls_sock, kwargs.get("server_hostname"))
        except BaseException:
            tls_sock.close()
            raise
        return tls_sock


def policy_ssl_context(policy: CertificatePolicy) -> PolicySSLContext:
    ctx = PolicySSLContext(ssl.PROTOCOL_TLS_CLIENT)
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    ctx.policy = policy
    return ctx
