"""Binary encoding and decoding of OPC UA built-in data types, node ids and extension objects."""

__version__ = "0.1.0"