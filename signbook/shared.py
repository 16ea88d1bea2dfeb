import sys
from struct import Struct
from array import array

#Tag Types
#A TAG_End is a nameless tag that terminates TAG_Compound and is the default tagType for an empty TAG_List.
TAG_END        = 0
TAG_BYTE       = 1  #A TAG_Byte payload stores a 1-byte signed integer.
TAG_SHORT      = 2  #A TAG_Short payload stores a 2-byte big-endian signed integer.
TAG_INT        = 3  #A TAG_Int payload stores a 4-byte big-endian signed integer.
TAG_LONG       = 4  #A TAG_Long payload stores an 8-byte big-endian signed integer.
TAG_FLOAT      = 5  #A TAG_Float payload stores a big-endian binary32.
TAG_DOUBLE     = 6  #A TAG_Double payload stores a big-endian binary64.
TAG_BYTE_ARRAY = 7  #Length (4-byte big-endian signed integer) followed by that many bytes.
TAG_STRING     = 8  #Length in bytes (2-byte big-endian unsigned integer) followed by modified UTF-8.
TAG_LIST       = 9  #Element tagType (1 byte), length (4-byte signed integer), then that many payloads.
TAG_COMPOUND   = 10 #Named tag headers + payloads, terminated by a TAG_End.
TAG_INT_ARRAY  = 11 #Length followed by that many 4-byte big-endian signed integers.
TAG_LONG_ARRAY = 12 #Length followed by that many 8-byte big-endian signed integers (Minecraft 1.12+).

#Internal names of tags (indexed by tag type) as defined by the NBT specification
TAG_NAMES = (
    "TAG_End",
    "TAG_Byte",
    "TAG_Short",
    "TAG_Int",
    "TAG_Long",
    "TAG_Float",
    "TAG_Double",
    "TAG_Byte_Array",
    "TAG_String",
    "TAG_List",
    "TAG_Compound",
    "TAG_Int_Array",
    "TAG_Long_Array"
)

#Total number of tags supported by this version of the library.
TAG_COUNT = len( TAG_NAMES )

#Structs
_NT = Struct( ">bH" )   #Named tag info
_TL = Struct( ">bi" )   #Tag list info
_B  = Struct( ">b"  )   #Signed byte (1 byte)
_S  = Struct( ">h"  )   #Signed big-endian short (2 bytes)
_US = Struct( ">H"  )   #Unsigned big-endian short (2 bytes)
_I  = Struct( ">i"  )   #Signed big-endian int (4 bytes)
_L  = Struct( ">q"  )   #Signed big-endian long (8 bytes)
_F  = Struct( ">f"  )   #Big-endian float (4 bytes)
_D  = Struct( ">d"  )   #Big-endian double (8 bytes)
_UI = Struct( ">I"  )   #Unsigned big-endian int (4 bytes)

#array typecodes with exactly 4 and 8 bytes per item
_INT_TYPE  = "i" if array( "i" ).itemsize == 4 else "l"
_UINT_TYPE = _INT_TYPE.upper()
_LONG_TYPE = "q"

class NBTFormatError( Exception ):
    """This exception is raised when parsing data that violates the NBT specification."""
    pass

class WrongTagError( NBTFormatError ):
    """
    WrongTagError( expected, given )

    This exception is raised when the root tag of an NBT document is not a TAG_Compound,
    or when a named tag has a different type than the reader expected.
    """
    def __str__( self ):
        return "Expected {}, but received {} instead.".format( describeTag( self.args[0] ), describeTag( self.args[1] ) )

class DuplicateNameError( NBTFormatError ):
    """
    DuplicateNameError( name )

    This exception is raised when multiple tags with the same name are parsed from the same TAG_Compound.
    """
    def __str__( self ):
        return "There is already a tag with the name \"{}\" in this TAG_Compound.".format( self.args[0] )

class UnknownTagTypeError( NBTFormatError ):
    """
    UnknownTagTypeError( tagType )

    This exception is raised when a tag with an invalid or unrecognized type is parsed.
    """
    def __str__( self ):
        return "Unknown or unsupported tag type: {:d}".format( self.args[0] )

class OutOfBoundsError( NBTFormatError ):
    """
    OutOfBoundsError( value, min, max )

    This exception is raised when parsing a length that is negative or too long to be represented.
    """
    def __str__( self ):
        return "Value {:d} is outside of expected range [{:d},{:d}].".format( *self.args )

class ChunkFormatError( NBTFormatError ):
    """
    ChunkFormatError( message )

    This exception is raised when a chunk's NBT is well-formed but doesn't match the layout expected for the world's version,
    e.g. a required field is missing or has the wrong tag type.
    """
    pass

class WorldError( Exception ):
    """This exception is raised when a save directory can't be read as a world."""
    pass

class WorldVersionError( WorldError ):
    """This exception is raised when a world's level.dat has neither a Version compound nor a version number."""
    pass

def describeTag( tagType ):
    """
    Returns a short description of a tag with the given tagType, including the internal name and numeric type (e.g. TAG_Compound (10) ).
    If tagType does not represent a valid tag, returns "Unknown (<tagType>)".
    """
    if tagType <= 0 or tagType >= TAG_COUNT:
        return "Unknown ({:d})".format( tagType )
    return "{} ({:d})".format( TAG_NAMES[tagType], tagType )

#_tls
def tagListString( length, tagType ):
    """
    Returns a str summarizing the contents of a TAG_List with the given length and tagType.
    Return "0 entries" if length == 0.
    Otherwise, return "<length> <name of tag>(s)".
    """
    if length == 0:
        return "0 entries"
    return "{:d} {:s}{}".format( length, TAG_NAMES[tagType], "s" if length != 1 else "" )

#_avtt
def assertValidTagType( tagType ):
    """Raises UnknownTagTypeError if the given tagType is unrecognized"""
    if tagType < 0 or tagType >= TAG_COUNT:
        raise UnknownTagTypeError( tagType )

#_r
def read( i, n ):
    """
    Reads n bytes from i (a readable file-like object).
    Raises an EOFError if the end-of-file is encountered before n bytes can be read.
    """
    b = i.read( n )
    if len( b ) != n:
        raise EOFError( "End of file reached prematurely!" )
    return b

#_retn
def readExpectedTagName( i, expected ):
    """
    Reads a named tag header and asserts that the tagType we read matches the given tagType, expected.
    Returns the name of the tag.
    """
    tagType, length = _NT.unpack( read( i, 3 ) )
    if tagType != expected:
        raise WrongTagError( expected, tagType )
    return _decode( read( i, length ) )

#_rb
def readByte( i ):
    """
    Reads a TAG_Byte payload.
    i is a file-like object to read bytes from.
    """
    return _B.unpack( read( i, 1 ) )[0]

def readShort( i ):
    """Reads a TAG_Short payload."""
    return _S.unpack( read( i, 2 ) )[0]

#_ri
def readInt( i ):
    """Reads a TAG_Int payload."""
    return _I.unpack( read( i, 4 ) )[0]

#_rl
def readLong( i ):
    """Reads a TAG_Long payload."""
    return _L.unpack( read( i, 8 ) )[0]

#_rf
def readFloat( i ):
    """Reads a TAG_Float payload."""
    return _F.unpack( read( i, 4 ) )[0]

#_rd
def readDouble( i ):
    """Reads a TAG_Double payload."""
    return _D.unpack( read( i, 8 ) )[0]

#Minecraft writes strings as Java's "modified UTF-8" (NUL as C0 80, supplementary characters as surrogate pairs).
#Plain UTF-8 decoding handles the common case; the fallbacks keep the text instead of failing the whole chunk.
def _decode( b ):
    try:
        return b.decode()
    except UnicodeDecodeError:
        pass
    try:
        s = b.replace( b"\xc0\x80", b"\0" ).decode( "utf-8", "surrogatepass" )
        return s.encode( "utf-16-le", "surrogatepass" ).decode( "utf-16-le" )
    except UnicodeError:
        return b.decode( "utf-8", "replace" )

#_rst
def readString( i ):
    """Reads a TAG_String payload."""
    l = _US.unpack( read( i, 2 ) )[0]
    return _decode( read( i, l ) )

#_rlh
def readTagListHeader( i ):
    """
    Reads a TAG_List header.

    Returns a tuple ( tagType, length ).
    tagType is the numerical ID of the tags contained in this list.
    length is how many tags are stored in the list.

    Raises UnknownTagTypeError if tagType is unknown.
    Raises OutOfBoundsError if the length of the list is negative.
    """
    p = _TL.unpack( read( i, 5 ) )
    assertValidTagType( p[0] )
    if p[1] < 0:
        raise OutOfBoundsError( p[1], 0, 2147483647 )
    return p

#_rah
def readArrayHeader( i ):
    """
    Reads a TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array header.
    Returns the length (in elements) of the array.
    If the length is negative, raises an OutOfBoundsError.
    """
    l = _I.unpack( read( i, 4 ) )[0]
    if l < 0:
        raise OutOfBoundsError( l, 0, 2147483647 )
    return l

#_rub
def readUnsignedByte( i ):
    """Reads an unsigned byte from i."""
    return read( i, 1 )[0] #note: no struct unpacking necessary; bytes() uses unsigned bytes

#_rui
def readUnsignedInt( i ):
    """Reads an unsigned, big-endian, 4-byte integer from i."""
    return _UI.unpack( read( i, 4 ) )[0]

#array assumes native-endianness in the data it reads to populate itself.
#Therefore, to properly read big-endian integers on little-endian systems we must reverse the endianness with byteswap().
def _readArray( typecode, size, i, n ):
    a = array( typecode )
    a.frombytes( read( i, size * n ) )
    if sys.byteorder == "little":
        a.byteswap()
    return a

#_ris
def readInts( i, n ):
    """Reads n signed, big-endian, 4-byte integers from i (a readable file-like object) into an array and returns it."""
    return _readArray( _INT_TYPE, 4, i, n )

#_ruis
def readUnsignedInts( i, n ):
    """Reads n unsigned, big-endian, 4-byte integers from i (a readable file-like object) into an array and returns it."""
    return _readArray( _UINT_TYPE, 4, i, n )

#_rls
def readLongs( i, n ):
    """Reads n signed, big-endian, 8-byte integers from i (a readable file-like object) into an array and returns it."""
    return _readArray( _LONG_TYPE, 8, i, n )
