from .decoder import AttributeFlags, FileAttribute, decode_attributes, read_attributes

__all__ = ['AttributeFlags', 'FileAttribute', 'decode_attributes', 'read_attributes']
