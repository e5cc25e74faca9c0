"""
This package contains all modules related to parsing and decoding data
received from BL-NET / D-LOGG loggers and CMI gateways.

Sub-packages handle specific data formats:

- ``commands``: Request commands for the binary protocol.
- ``header``: Header frame and device-info reply decoding.
- ``record``: Binary current-data frame decoding into ``SensorRecord``.
- ``cmi``: CMI JSON document decoding into ``SensorRecord``.
"""
