"""
signbook recovers sign text and book contents from Minecraft Java Edition saves.
It reads the world's level.dat and Anvil region files (1.2 through 1.18+ chunk layouts) and produces plain text reports.
"""

#NBT Tag Types, Exceptions
from signbook.shared import (
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    TAG_COUNT,
    NBTFormatError, WrongTagError, DuplicateNameError, UnknownTagTypeError, OutOfBoundsError, ChunkFormatError, WorldError, WorldVersionError
)

#read, NBTDocument and TAG_* Classes
from signbook.tag import read, NBTDocument, TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array

#Region files
from signbook.region import Region

#Chunk layouts
from signbook.chunk import Version, Book, Item, BlockEntity, Entity, ChunkView, LegacyChunk, Chunk1_17, Chunk1_18, selectAdapter

#Extraction and text
from signbook.extract import Sign, BookWithPos, extractChunk, isSignID, isBookID
from signbook.text    import signLineText, stripFormatting

#Worlds and reports
from signbook.world  import World, Result, extractRegion
from signbook.report import writeSigns, writeBooks, report

#Configuration
from signbook.util import setMinecraftDir, getMinecraftPath


#Export everything we imported above
__all__ = [
    "TAG_END", "TAG_BYTE", "TAG_SHORT", "TAG_INT", "TAG_LONG", "TAG_FLOAT", "TAG_DOUBLE", "TAG_BYTE_ARRAY", "TAG_STRING", "TAG_LIST", "TAG_COMPOUND", "TAG_INT_ARRAY", "TAG_LONG_ARRAY",
    "TAG_COUNT",
    "NBTFormatError", "WrongTagError", "DuplicateNameError", "UnknownTagTypeError", "OutOfBoundsError", "ChunkFormatError", "WorldError", "WorldVersionError",
    "read", "NBTDocument", "TAG_Byte", "TAG_Short", "TAG_Int", "TAG_Long", "TAG_Float", "TAG_Double", "TAG_Byte_Array", "TAG_String", "TAG_List", "TAG_Compound", "TAG_Int_Array", "TAG_Long_Array",
    "Region",
    "Version", "Book", "Item", "BlockEntity", "Entity", "ChunkView", "LegacyChunk", "Chunk1_17", "Chunk1_18", "selectAdapter",
    "Sign", "BookWithPos", "extractChunk", "isSignID", "isBookID",
    "signLineText", "stripFormatting",
    "World", "Result", "extractRegion",
    "writeSigns", "writeBooks", "report",
    "setMinecraftDir", "getMinecraftPath"
]
