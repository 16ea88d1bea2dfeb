"""
Pulls signs and books out of a ChunkView.

Signs are block entities whose ID ends with "sign" (oak_sign, spruce_wall_sign, the legacy "Sign", ...).
Books are writable or written books stored in containers, or carried by dropped item entities.
"""
import math

from signbook.shared import ChunkFormatError


class Sign:
    """
    A sign found in the world.
    lines holds the four raw lines as stored in the save; see signbook.text.signLineText() for turning them into plain text.
    """
    __slots__ = ( "x", "y", "z", "lines" )

    def __init__( self, x, y, z, lines ):
        self.x     = x
        self.y     = y
        self.z     = z
        self.lines = lines

    def __repr__( self ):
        return "Sign({:d}, {:d}, {:d}, {!r})".format( self.x, self.y, self.z, self.lines )

class BookWithPos:
    """A Book together with the block coordinates it was found at."""
    __slots__ = ( "book", "x", "y", "z" )

    def __init__( self, book, x, y, z ):
        self.book = book
        self.x    = x
        self.y    = y
        self.z    = z

    def __repr__( self ):
        return "BookWithPos({!r}, {:d}, {:d}, {:d})".format( self.book, self.x, self.y, self.z )


def isSignID( id ):
    """Returns True if a block entity with the given ID is a sign. Case-insensitive; legacy saves use "Sign"."""
    return id.lower().endswith( "sign" )

def isBookID( id ):
    """
    Returns True if an item with the given ID is a writable or written book.
    Enchanted books and the plain "minecraft:book" item don't hold any text and are excluded.
    """
    id = id.lower()
    return id.endswith( "book" ) and not id.endswith( "enchanted_book" ) and not id.endswith( ":book" )

def _bookOf( item ):
    #Returns the item's Book if it's a book with pages, otherwise None.
    if item is None or not isBookID( item.id ):
        return None
    book = item.tag
    if book is None or book.pages is None:
        return None
    return book

def sortKey( record ):
    """Sort key for signs and books: ascending x, then z, then y."""
    return ( record.x, record.z, record.y )

def extractChunk( view ):
    """
    Returns a tuple ( signs, books ) of the Signs and BookWithPos found in the given ChunkView.
    Raises ChunkFormatError if a sign doesn't have all four lines; the caller should skip the whole chunk.
    """
    signs = []
    books = []

    for be in view.blockEntities:
        if isSignID( be.id ):
            lines = be.signLines
            if lines is None or any( line is None for line in lines ):
                raise ChunkFormatError( "Sign at {:d},{:d},{:d} is missing one or more lines.".format( be.x, be.y, be.z ) )
            signs.append( Sign( be.x, be.y, be.z, list( lines ) ) )
        elif be.items is not None:
            for item in be.items:
                book = _bookOf( item )
                if book is not None:
                    books.append( BookWithPos( book, be.x, be.y, be.z ) )

    #Only legacy chunks carry entities
    for entity in view.entities:
        book = _bookOf( entity.item )
        if book is not None:
            x, y, z = entity.pos
            books.append( BookWithPos( book, math.floor( x ), math.floor( y ), math.floor( z ) ) )

    return signs, books
