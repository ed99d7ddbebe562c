"""EGTS telematics protocol: packet framing, responses, subrecords, checksums, settings and storages."""

__version__ = "0.1.0"