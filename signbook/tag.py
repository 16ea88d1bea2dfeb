"""
signbook's tag module provides a read-only, DOM-style interface for NBT documents.

NBTDocument, the TAG_* classes and the read() function are implemented here.
Tags are subclasses of the matching Python types (int, float, str, list, OrderedDict, etc.),
so chunk data can be inspected with ordinary Python code once it has been read.
"""
import gzip
import zlib
import itertools

from collections import OrderedDict
from io import BytesIO, StringIO

from signbook.shared import (
    DuplicateNameError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,

    readByte            as _rb,   readShort         as _rs,   readInt             as _ri,
    readLong            as _rl,   readFloat         as _rf,   readDouble          as _rd,
    readString          as _rst,  readTagListHeader as _rlh,  readArrayHeader     as _rah,
    readInts            as _ris,  readLongs         as _rls,  read                as _r,
    readExpectedTagName as _retn,

    tagListString       as _tls,
    assertValidTagType  as _avtt
)

INF = float( "inf" )

#Base class methods called at various locations
_int_repr       = int.__repr__
_float_repr     = float.__repr__
_str_repr       = str.__repr__
_list_repr      = list.__repr__

#Returns an NBT class that stores a primitive like byte, short, int, or long.
def _makeIntPrimitiveClass( classname, tt, r ):
    class _IntPrimitiveTag( _BaseIntTag ):
        __slots__ = ()
        tagType = tt
    def _r( i ):
        return _IntPrimitiveTag( r( i ) )
    _IntPrimitiveTag._r = _r

    _IntPrimitiveTag.__name__ = classname
    _IntPrimitiveTag.__qualname__ = classname
    _IntPrimitiveTag.__doc__ = \
        """
        Represents a {0:}.
        {0:} is an int subclass and generally works the same way and in the same places as an int would.
        """.format( classname )
    return _IntPrimitiveTag

class _BaseTag:
    """Base class for all signbook tag classes."""
    tagType     = -1

    #Simple means to check if a tag is a specific tagType
    isString    = False
    isList      = False
    isCompound  = False

    #Simple means to check properties of the tag
    isNumeric   = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double
    isIntegral  = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long,

    __slots__ = ()

    def print( self, maxdepth=INF, maxlen=INF, fn=print ):
        """
        Recursively pretty-print the tag and its children.
        maxdepth is the maximum recursive depth to pretty-print.
            0 prints only this tag,
            1 prints this tag and its children,
            2 prints this tag, its children, and their children, and so on.
            Infinity is the default and prints the entire tree.
        maxlen is the maximum number of tags per TAG_List / TAG_Compound to print.
            For example, 64 would print only the first 64 entries in a list, and print a single ... for the remaining entries.
        fn is the callable that will be used to print a line of text, and defaults to the built-in print function.

        Example:
        >>> ex.print( 1 )
        TAG_Compound: 2 entries {
            TAG_String("str"): Example string
            TAG_List("floats"): 2 TAG_Floats [ ... ]
        }
        """
        return self._p( "", 0, maxdepth, maxlen, fn )
    def sprint( self, maxdepth=INF, maxlen=INF ):
        """
        Recursively pretty-print the tag and its children to a string and return it.
        See help( tag.print ) for a description of maxdepth and maxlen.
        """
        with StringIO() as out:
            self.print( maxdepth, maxlen, lambda x: out.write( x + "\n" ) )
            return out.getvalue()

    def rget( self, *args, default=None ):
        """
        Recursive get.

        Gets the tag inside of this tag whose name or index is the first argument.
        If there is no such tag, returns default (which is None by default).
        If there is such a tag and len( args ) > 1, recursively calls rget() on the found tag with the remaining arguments.
        Otherwise, returns the found tag.

        Example:
            #Throws an exception if "Version" is not in leveldata["Data"]:
            version = leveldata["Data"]["Version"]

            #Does the same thing, but returns None instead of throwing an exception:
            version = leveldata.rget( "Data", "Version" )
        """
        if len( args ) == 0:
            raise TypeError( "rget() takes at least 1 argument but 0 were given." )
        return default

    def _p( self, name, depth, maxdepth, maxlen, fn ):
        """
        Recursive step of print().
        name is a str inserted after the tag type indicating the name/index of that tag within its parent.
        depth is the current recursive depth.
        """
        raise NotImplementedError()
    def _r( i ):
        """Read this tag from the given readable file-like object, i."""
        raise NotImplementedError()

class _BaseIntTag( int, _BaseTag ):
    """Base class for all primitive integer tags (TAG_Byte, TAG_Short, TAG_Int, TAG_Long)."""
    isNumeric  = True
    isIntegral = True

    __slots__ = ()

    def __repr__( self ):
        return "{}({})".format( self.__class__.__name__, _int_repr( self ) )
    def _p( self, name, depth, maxdepth, maxlen, fn ):
        fn( "{}{}{}: {:d}".format( "    "*depth, self.__class__.__name__, name, self ) )

TAG_Byte  = _makeIntPrimitiveClass( "TAG_Byte",  TAG_BYTE,  _rb )
TAG_Short = _makeIntPrimitiveClass( "TAG_Short", TAG_SHORT, _rs )
TAG_Int   = _makeIntPrimitiveClass( "TAG_Int",   TAG_INT,   _ri )
TAG_Long  = _makeIntPrimitiveClass( "TAG_Long",  TAG_LONG,  _rl )

class TAG_Float( float, _BaseTag ):
    """Represents a TAG_Float."""
    tagType   = TAG_FLOAT
    isNumeric = True

    __slots__ = ()

    def __repr__( self ):
        return "TAG_Float({})".format( _float_repr( self ) )
    def _p( self, name, depth, maxdepth, maxlen, fn ):
        fn( "{}TAG_Float{}: {:.17g}".format( "    "*depth, name, self ) )
    def _r( i ):
        return TAG_Float( _rf( i ) )

class TAG_Double( float, _BaseTag ):
    """Represents a TAG_Double."""
    tagType   = TAG_DOUBLE
    isNumeric = True

    __slots__ = ()

    def __repr__( self ):
        return "TAG_Double({})".format( _float_repr( self ) )
    def _p( self, name, depth, maxdepth, maxlen, fn ):
        fn( "{}TAG_Double{}: {:.17g}".format( "    "*depth, name, self ) )
    def _r( i ):
        return TAG_Double( _rd( i ) )

class TAG_Byte_Array( bytes, _BaseTag ):
    """
    Represents a TAG_Byte_Array.
    Values are exposed as unsigned bytes in the range [0,255];
    the NBT specification doesn't specify the format of bytes within a TAG_Byte_Array.
    """
    tagType     = TAG_BYTE_ARRAY

    __slots__ = ()

    def __repr__( self ):
        return "TAG_Byte_Array({:d} bytes)".format( len( self ) )
    def _p( self, name, depth, maxdepth, maxlen, fn ):
        l = len( self )
        fn( "{}TAG_Byte_Array{}: [{:d} byte{}]".format( "    "*depth, name, l, "s" if l != 1 else "" ) )
    def _r( i ):
        l = _rah( i )
        return TAG_Byte_Array( _r( i, l ) )

class TAG_String( str, _BaseTag ):
    """Represents a TAG_String."""
    tagType    = TAG_STRING
    isString   = True

    __slots__ = ()

    def __repr__( self ):
        return "TAG_String({})".format( _str_repr( self ) )

    def _p( self, name, depth, maxdepth, maxlen, fn ):
        fn( "{}TAG_String{}: {:s}".format( "    "*depth, name, self ) )
    def _r( i ):
        return TAG_String( _rst( i ) )

class _BaseArrayTag( list, _BaseTag ):
    """
    Base class for TAG_Int_Array and TAG_Long_Array.
    Stored as a plain list of ints; chunk heightmaps and block states are never interpreted here.
    """
    __slots__ = ()

    _unit = ""

    def __repr__( self ):
        return "{}({:d} {}s)".format( self.__class__.__name__, len( self ), self._unit )

    def _p( self, name, depth, maxdepth, maxlen, fn ):
        l = len( self )
        fn( "{}{}{}: [{:d} {}{}]".format( "    "*depth, self.__class__.__name__, name, l, self._unit, "s" if l != 1 else "" ) )

class TAG_Int_Array( _BaseArrayTag ):
    """Represents a TAG_Int_Array."""
    tagType    = TAG_INT_ARRAY

    __slots__ = ()

    _unit = "int"

    def _r( i ):
        l = _rah( i )
        return TAG_Int_Array( _ris( i, l ) if l > 0 else () )

class TAG_Long_Array( _BaseArrayTag ):
    """Represents a TAG_Long_Array."""
    tagType     = TAG_LONG_ARRAY

    __slots__ = ()

    _unit = "long"

    def _r( i ):
        l = _rah( i )
        return TAG_Long_Array( _rls( i, l ) if l > 0 else () )

class TAG_List( list, _BaseTag ):
    """
    Represents a TAG_List.
    TAG_List is a list subclass; listTagType is the tagType of the tags it stores (TAG_END for an empty list).
    """
    tagType    = TAG_LIST
    isList     = True

    __slots__ = "listTagType"

    def __init__( self, iterable=(), listTagType=TAG_END ):
        super().__init__( iterable )
        self.listTagType = listTagType

    def __repr__( self ):
        if len( self ) > 0:
            return "TAG_List({})".format( _list_repr( self ) )
        else:
            return "TAG_List()"

    def rget( self, *args, default=None ):
        l = len( args )
        if l == 0:
            raise TypeError( "rget() takes at least 1 argument but 0 were given." )
        else:
            i = args[0]
            if not isinstance( i, int ) or i >= len( self ) or i < 0:
                return default

            if l == 1:
                return self[i]
            else:
                return self[i].rget( *args[1:], default=default )

    def _p( self, name, depth, maxdepth, maxlen, fn ):
        l = len( self )
        indent = "    "*depth
        line = "{}TAG_List{}: {} [".format( indent, name, _tls( l, self.listTagType ) )

        if l == 0:
            fn( line + "]" )
        elif depth < maxdepth and maxlen != 0:
            fn( line )

            depth = depth + 1
            for i, t in enumerate( itertools.islice( self, maxlen ) if maxlen < l else self ):
                t._p( "({:d})".format( i ), depth, maxdepth, maxlen, fn )
            if maxlen < l:
                fn( indent + "    ..." )

            fn( indent + "]" )
        else:
            fn( line + " ... ]" )

    def _r( i ):
        t, l = _rlh( i )
        tag = TAG_List( listTagType=t )
        #A list of TAG_End is only valid when it's empty; there's nothing to read either way.
        if t != TAG_END:
            c = _TAGCLASS[ t ]
            a = super( TAG_List, tag ).append
            for _ in range( l ):
                a( c._r( i ) )
        return tag


class TAG_Compound( OrderedDict, _BaseTag ):
    """
    Represents a TAG_Compound.
    TAG_Compound is an OrderedDict subclass whose keys are str and whose values are TAG_* objects.
    """
    tagType = TAG_COMPOUND
    isCompound = True

    __slots__ = ()

    def rget( self, *args, default=None ):
        l = len( args )
        if l == 0:
            raise TypeError( "rget() takes at least 1 argument but 0 were given." )
        elif l == 1:
            return self.get( args[0], default )
        else:
            tag = self.get( args[0] )
            if tag is None:
                return default
            return tag.rget( *args[1:], default=default )

    def _p( self, name, depth, maxdepth, maxlen, fn ):
        l = len( self )
        indent = "    "*depth
        line = "{}TAG_Compound{}: {} {{".format( indent, name, "{:d} entr{}".format( l, "ies" if l != 1 else "y" ) )
        if l == 0:
            fn( line + "}" )
        elif depth < maxdepth and maxlen != 0:
            fn( line )
            depth = depth + 1
            items = itertools.islice( self.items(), maxlen ) if maxlen < l else self.items()
            for n,t in items:
                t._p( "(\"{}\")".format( n ), depth, maxdepth, maxlen, fn )
            if maxlen < l:
                fn( indent + "    ..." )
            fn( indent + "}" )
        else:
            fn( line + " ... }" )

    def _r( i ):
        tag = TAG_Compound()
        si = super( TAG_Compound, tag ).__setitem__

        tt = _rb( i )
        while tt != TAG_END:
            #Check that the tagType is valid.
            _avtt( tt )

            #Now that we know the tag isn't TAG_END, read the name and check that there isn't already a tag with that name
            name = _rst( i )
            if name in tag:
                raise DuplicateNameError( name )

            si( name, _TAGCLASS[tt]._r( i ) )
            tt = _rb( i )

        return tag

class NBTDocument( TAG_Compound ):
    """
    Represents an NBT document.

    An NBTDocument is a named TAG_Compound that serves as the root tag of the NBT tree.
    More often than not the name is simply the empty string, "".
    """
    __slots__ = ()

    def __init__( self, name="", *args, **kwargs ):
        super().__init__( *args, **kwargs )
        self.name = name

    def print( self, maxdepth=INF, maxlen=INF, fn=print ):
        self._p( "(\"{}\")".format( self.name ), 0, maxdepth, maxlen, fn )

    def _r( i ):
        name = _retn( i, TAG_COMPOUND )
        doc = NBTDocument( name )
        doc.update( TAG_Compound._r( i ) )
        return doc

    def __repr__( self ):
        return "NBTDocument('{}', {:d} entr{})".format( self.name, len( self ), "ies" if len( self ) != 1 else "y" )

#Tuple of tag classes indexed by tagType.
#Do _TAGCLASS[tagType] to get the class for the tag with that tagType.
_TAGCLASS = (
    None,           #TAG_END
    TAG_Byte,       #TAG_BYTE
    TAG_Short,      #TAG_SHORT
    TAG_Int,        #TAG_INT
    TAG_Long,       #TAG_LONG
    TAG_Float,      #TAG_FLOAT
    TAG_Double,     #TAG_DOUBLE
    TAG_Byte_Array, #TAG_BYTE_ARRAY
    TAG_String,     #TAG_STRING
    TAG_List,       #TAG_LIST
    TAG_Compound,   #TAG_COMPOUND
    TAG_Int_Array,  #TAG_INT_ARRAY
    TAG_Long_Array  #TAG_LONG_ARRAY
)

def read( source, compression="gzip" ):
    """
    Parses an NBT document from source and returns an NBTDocument.

    source can be the path of the file to read from (as a str or os.PathLike), bytes containing uncompressed NBT data,
    or a readable file-like object containing uncompressed NBT data.
    compression is an optional parameter that can be None, "gzip", or "zlib". Defaults to "gzip".
        It only applies when source is a path.

    Raises NBTFormatError (or a subclass) if the data is malformed, and EOFError if it ends prematurely.
    """
    if isinstance( source, ( bytes, bytearray, memoryview ) ):
        return NBTDocument._r( BytesIO( source ) )
    if hasattr( source, "read" ):
        return NBTDocument._r( source )

    if compression is None:
        file = open( source, "rb" )
    elif compression == "gzip":
        file = gzip.open( source, "rb" )
    elif compression == "zlib":
        with open( source, "rb" ) as hardfile:
            file = BytesIO( zlib.decompress( hardfile.read() ) )
    else:
        raise ValueError( "Unknown compression type \"{}\".".format( compression ) )
    with file:
        return NBTDocument._r( file )
