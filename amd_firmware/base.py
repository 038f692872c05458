'''Base provides basic firmware object structures.
'''

import struct
from collections import namedtuple


class ByteRange(namedtuple("ByteRange", ["offset", "length"])):
    '''Where, within an image, a firmware object was found.'''
    __slots__ = ()

    @property
    def end(self):
        return self.offset + self.length


def structure_type(name, layout):
    '''Create an immutable record type from a field layout.

    Args:
        name (string): Name of the generated type.
        layout (list): (field name, struct format) pairs in wire order. Each
            format carries its own byte order so no padding is inserted.

    Return:
        type: A namedtuple subclass with '_layout_' and 'size' attributes.
    '''
    record = namedtuple(name, [field[0] for field in layout])
    record._layout_ = list(layout)
    record.size = sum([struct.calcsize(field[1]) for field in layout])
    return record


class FirmwareObject(object):
    '''A pseudo-abstract type providing common firmware member facilities.'''
    def __init__(self):
        self.data = None
        self.name = None
        self.attrs = None

    @property
    def content(self):
        '''The object content is the 'data' stream.'''
        if hasattr(self, "data") and self.data is not None:
            return self.data
        return b""

    @property
    def label(self):
        '''An overload for an object 'name'.'''
        if hasattr(self, "name") and self.name is not None:
            return self.name
        return ""

    @property
    def type_label(self):
        '''The string representation of the object's class name.'''
        return self.__class__.__name__

    @property
    def attrs_label(self):
        '''An overload for the 'attrs' field.'''
        if hasattr(self, "attrs") and self.attrs is not None:
            return self.attrs
        return {}

    def info(self, include_content=False):
        '''Firmware objects define a common interface for information.

        This defines: label, type, content, attrs-- as common between
        most firmware objects.

        Args:
            include_content (Optional[bool]): Include a pointer to the 'data'
            or content stream.

        Return:
            dict: Return a pointer to this object "_self" and the defines listed
                above with an optional pointer to the data stream.
        '''
        return {
            "_self": self,
            "label": self.label,
            "type": self.type_label,
            "content": self.content if include_content else b"",
            "attrs": self.attrs_label
        }


class StructuredObject(object):
    def __init__(self):
        self.structure = None

    def parse_structure(self, data, structure):
        '''Construct an instance of the provided structure type.

        Fields are unpacked one at a time from a cursor over data, which
        must hold at least 'structure.size' bytes.
        '''
        values = []
        cursor = 0
        for _name, fmt in structure._layout_:
            values.append(struct.unpack_from(fmt, data, cursor)[0])
            cursor += struct.calcsize(fmt)
        self.structure = structure(*values)
        self.structure_data = bytes(data[:cursor])
        self.structure_fields = list(structure._fields)
        self.structure_size = cursor

    def build_structure(self):
        '''Pack the structure back into its wire representation.'''
        return b"".join([
            struct.pack(fmt, getattr(self.structure, name))
            for name, fmt in self.structure._layout_
        ])

    def show_structure(self):
        for field in self.structure_fields:
            print("%s: %s" % (field, getattr(self.structure, field, None)))

