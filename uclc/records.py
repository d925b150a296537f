"""Construction and layout of struct and union types."""

from uclc.typesystem import Categ, Field, Qual, RecordType, align_up, primitive

__all__ = [
    "LayoutError",
    "start_record",
    "add_field",
    "lookup_field",
    "add_offset",
    "end_record",
]

# Bit-fields are laid out from the least significant bit of each int.
_LITTLE_ENDIAN = True


class LayoutError(ValueError):
    """A struct or union whose members cannot be laid out."""


def start_record(name, categ):
    """A new, empty struct or union type named name (None if anonymous)."""
    categ = Categ(categ)
    if categ not in (Categ.STRUCT, Categ.UNION):
        raise ValueError(f"records are structs or unions, not {categ.name}")
    return RecordType(categ, name=name)


def add_field(rty, name, fty, bits=0):
    """Append a member to rty; bits is the width of a bit-field, 0 otherwise.

    Offsets are assigned later by end_record.
    """
    if fty.size == 0 and fty.categ == Categ.ARRAY:
        rty.has_flex_array = True
    if fty.qual & Qual.CONST:
        rty.has_const_field = True
    fld = Field(name, fty, bits)
    rty.fields.append(fld)
    return fld


def lookup_field(rty, name):
    """The member called name, looking inside unnamed struct/union members."""
    for fld in rty.fields:
        if fld.name is None and fld.ty.is_record():
            found = lookup_field(fld.ty, name)
            if found is not None:
                return found
        elif fld.name == name:
            return fld
    return None


def add_offset(rty, offset):
    """Shift the members of an unnamed nested record by offset."""
    for fld in rty.fields:
        fld.offset += offset
        if fld.name is None and fld.ty.is_record():
            add_offset(fld.ty, fld.offset)


def _layout_struct(rty):
    int_size = primitive(Categ.INT).size
    int_bits = int_size * 8
    bits = 0
    for fld in rty.fields:
        fld.offset = rty.size = align_up(rty.size, fld.ty.align)
        if fld.name is None and fld.ty.is_record():
            add_offset(fld.ty, fld.offset)
        if fld.bits == 0:
            if bits != 0:
                # the pending bit-fields occupy a whole int
                fld.offset = rty.size = align_up(rty.size + int_size, fld.ty.align)
            bits = 0
            rty.size += fld.ty.size
        elif bits + fld.bits <= int_bits:
            fld.pos = bits if _LITTLE_ENDIAN else int_bits - bits
            bits += fld.bits
            if bits == int_bits:
                rty.size += int_size
                bits = 0
        else:
            # does not fit with the previous bit-fields: start a new int
            rty.size += int_size
            fld.offset += int_size
            fld.pos = 0 if _LITTLE_ENDIAN else int_bits - fld.bits
            bits = fld.bits
        rty.align = max(rty.align, fld.ty.align)
    if bits != 0:
        rty.size += int_size
    rty.size = align_up(rty.size, rty.align)


def _layout_union(rty):
    for fld in rty.fields:
        rty.align = max(rty.align, fld.ty.align)
        rty.size = max(rty.size, fld.ty.size)


def end_record(rty):
    """Lay out rty: member offsets and bit positions, size and alignment.

    Raises LayoutError for a flexible array member in a union or in an
    otherwise empty struct; the layout is computed before the error is raised.
    """
    if rty.categ == Categ.STRUCT:
        _layout_struct(rty)
        if rty.size == 0 and rty.has_flex_array:
            raise LayoutError("flexible array member in otherwise empty struct")
    else:
        _layout_union(rty)
        if rty.has_flex_array:
            raise LayoutError("flexible array member in union")
    return rty