"""src/reqline/transport/tls.py

TLS configuration for Reqline.
"""

import ssl


def create_ssl_context(verify: bool = True) -> ssl.SSLContext:
    """
    Creates a default SSL context with TLS 1.2 minimum.

    With ``verify=False`` neither the certificate chain nor the host name
    is checked.
    """
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context
