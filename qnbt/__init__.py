"""
qnbt is a library for reading and writing Named Binary Tag (NBT) data for Python 3.
It converts between a tree of tags and both binary NBT (optionally gzip / zlib compressed) and SNBT, NBT's text form.
"""

#NBT Tag Types, Limits, Exceptions
from qnbt.shared import (
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    TAG_NAMES, TAG_COUNT,
    MAX_DEPTH, MAX_STRING_LENGTH, MAX_ARRAY_LENGTH,
    NBTError, NBTFormatError, UnexpectedEndError, UnknownTagTypeError, OutOfBoundsError, StringTooLongError, ModifiedUTF8Error, ListTypeError, NestingLimitError,
    WrongTagError, MissingTagError, ConversionError,
    SNBTError, SNBTEndError, UnexpectedTokenError, MissingValueError, TrailingCommaError, UnterminatedStringError, InvalidEscapeError, InvalidNumberError, MixedListError, SNBTNestingError,
    describeTag, encodeModifiedUTF8, decodeModifiedUTF8
)

#TAG_* Classes
from qnbt.tag import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array,
    tagClass
)

#Binary NBT
from qnbt.reader import read, readNamedTag, NamedTag
from qnbt.writer import write, writeNamedTag

#SNBT
from qnbt.snbt import parse
from qnbt.formatter import toSNBT

#Compression
from qnbt.compression import COMPRESSIONS, compress, decompress


#Export everything we imported above
__all__ = [
    "TAG_END", "TAG_BYTE", "TAG_SHORT", "TAG_INT", "TAG_LONG", "TAG_FLOAT", "TAG_DOUBLE", "TAG_BYTE_ARRAY", "TAG_STRING", "TAG_LIST", "TAG_COMPOUND", "TAG_INT_ARRAY", "TAG_LONG_ARRAY",
    "TAG_NAMES", "TAG_COUNT",
    "MAX_DEPTH", "MAX_STRING_LENGTH", "MAX_ARRAY_LENGTH",
    "NBTError", "NBTFormatError", "UnexpectedEndError", "UnknownTagTypeError", "OutOfBoundsError", "StringTooLongError", "ModifiedUTF8Error", "ListTypeError", "NestingLimitError",
    "WrongTagError", "MissingTagError", "ConversionError",
    "SNBTError", "SNBTEndError", "UnexpectedTokenError", "MissingValueError", "TrailingCommaError", "UnterminatedStringError", "InvalidEscapeError", "InvalidNumberError", "MixedListError", "SNBTNestingError",
    "describeTag", "encodeModifiedUTF8", "decodeModifiedUTF8",
    "TAG_Byte", "TAG_Short", "TAG_Int", "TAG_Long", "TAG_Float", "TAG_Double", "TAG_Byte_Array", "TAG_String", "TAG_List", "TAG_Compound", "TAG_Int_Array", "TAG_Long_Array",
    "tagClass",
    "read", "readNamedTag", "NamedTag",
    "write", "writeNamedTag",
    "parse",
    "toSNBT",
    "COMPRESSIONS", "compress", "decompress"
]
