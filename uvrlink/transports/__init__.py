"""
Transports carry one request to the logger and hand back one reply.

- ``blnet``: raw TCP stream to a BL-NET / D-LOGG (connect, write, read, close).
- ``cmi``: HTTP GET against the CMI JSON API with Basic Auth.
- ``retry``: command spacing, reply validation and bounded retries.
"""
