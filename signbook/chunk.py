#This module turns a chunk's NBT document into a ChunkView: the block entities and entities we care about,
#normalized across the three chunk layouts Minecraft has used since the Anvil format was introduced.
#
#    Legacy (1.2 - 1.16, and any world whose level.dat predates the Version compound):
#        { Level: { TileEntities: [...], Entities: [...] } }
#    1.17 (data versions 2682 - 2730):
#        { Level: { TileEntities: [...] } }
#        Entities moved to a separate entities/ region tree, which we don't read.
#    1.18+ (data versions 2731 and up):
#        { block_entities: [...] }
#
#Read more about the format here:
#    https://minecraft.wiki/w/Chunk_format

import math

from signbook.shared import ChunkFormatError, WorldVersionError, TAG_END, TAG_COMPOUND, TAG_STRING

#Name of the synthetic version descriptor used for worlds without a Version compound in level.dat
LEGACY_NAME = "old"

#Highest data version that still uses the legacy layout, and highest that uses the 1.17 layout
LAST_LEGACY_ID = 2681
LAST_1_17_ID   = 2730

#Before 1.8, items were saved with numeric IDs. These are the ones the extractor needs to tell apart.
LEGACY_ITEM_NAMES = {
    340: "minecraft:book",
    386: "minecraft:writable_book",
    387: "minecraft:written_book",
    403: "minecraft:enchanted_book",
}

SIGN_LINE_NAMES = ( "Text1", "Text2", "Text3", "Text4" )


class Version:
    """
    Describes the version of Minecraft that last saved a world.
    id is the world's data version (or, for legacy worlds, the old "version" number from level.dat).
    name is the version's name (e.g. "1.18.2"), or "old" for legacy worlds.
    snapshot is True if the world was saved by a snapshot.
    """
    __slots__ = ( "id", "name", "snapshot" )

    def __init__( self, id, name, snapshot=False ):
        self.id       = id
        self.name     = name
        self.snapshot = snapshot

    @classmethod
    def fromLevelData( cls, leveldata ):
        """
        Returns the Version described by the given level.dat NBTDocument.
        Uses Data.Version if present; otherwise falls back to a legacy descriptor built from Data.version.
        Raises WorldVersionError if neither is present.
        """
        version = leveldata.rget( "Data", "Version" )
        if version is not None and getattr( version, "isCompound", False ):
            try:
                return cls( int( version["Id"] ), str( version["Name"] ), bool( version.get( "Snapshot", 0 ) ) )
            except ( KeyError, TypeError, ValueError ) as e:
                raise WorldVersionError( "Malformed Version compound in level.dat: {}".format( e ) ) from e

        old = leveldata.rget( "Data", "version" )
        if old is None or not getattr( old, "isIntegral", False ):
            raise WorldVersionError( "Unknown world version: level.dat has neither Data.Version nor Data.version." )
        return cls( int( old ), LEGACY_NAME, False )

    def getLegacy( self ):
        """Returns True if this is the synthetic descriptor for worlds that predate the Version compound."""
        return self.name == LEGACY_NAME
    isLegacy = property( getLegacy )

    def __eq__( self, other ):
        if not isinstance( other, Version ):
            return NotImplemented
        return ( self.id, self.name, self.snapshot ) == ( other.id, other.name, other.snapshot )

    def __hash__( self ):
        return hash( ( self.id, self.name, self.snapshot ) )

    def __repr__( self ):
        return "Version({:d}, '{}', snapshot={})".format( self.id, self.name, self.snapshot )


#Field accessors. Each one raises ChunkFormatError if a required field is missing or if a field has the wrong tag type.
def _field( compound, name, flag, required ):
    tag = compound.get( name )
    if tag is None:
        if required:
            raise ChunkFormatError( "Missing field \"{}\".".format( name ) )
        return None
    if not getattr( tag, flag, False ):
        raise ChunkFormatError( "Field \"{}\" has the wrong type ({}).".format( name, tag.__class__.__name__ ) )
    return tag

def _string( compound, name, required=True ):
    tag = _field( compound, name, "isString", required )
    return None if tag is None else str( tag )

def _int( compound, name, required=True ):
    tag = _field( compound, name, "isIntegral", required )
    return None if tag is None else int( tag )

def _compound( compound, name, required=True ):
    return _field( compound, name, "isCompound", required )

def _list( compound, name, listTagType, required=True ):
    tag = _field( compound, name, "isList", required )
    if tag is not None and tag.listTagType not in ( TAG_END, listTagType ):
        raise ChunkFormatError( "Field \"{}\" is a list of the wrong type.".format( name ) )
    return tag


class Book:
    """
    The text-bearing part of a book item's tag.
    pages is a list of str, or None if the item has no pages.
    title and author are str or None (writable books have neither).
    """
    __slots__ = ( "pages", "title", "author" )

    def __init__( self, pages=None, title=None, author=None ):
        self.pages  = pages
        self.title  = title
        self.author = author

    @staticmethod
    def fromNBT( tag ):
        #Any item can carry a tag, so fields of the wrong type are treated as absent rather than failing the chunk.
        pages = tag.get( "pages" )
        if pages is not None and getattr( pages, "isList", False ) and pages.listTagType in ( TAG_END, TAG_STRING ):
            pages = [ str( page ) for page in pages ]
        else:
            pages = None
        title  = tag.get( "title" )
        author = tag.get( "author" )
        return Book(
            pages,
            str( title )  if getattr( title,  "isString", False ) else None,
            str( author ) if getattr( author, "isString", False ) else None
        )

    def __repr__( self ):
        return "Book(title={!r}, author={!r}, pages={})".format( self.title, self.author, None if self.pages is None else len( self.pages ) )


class Item:
    """An item stack stored in a container or carried by an item entity."""
    __slots__ = ( "id", "count", "slot", "tag" )

    def __init__( self, id, count=None, slot=None, tag=None ):
        self.id    = id
        self.count = count
        self.slot  = slot
        self.tag   = tag

    @staticmethod
    def fromNBT( compound ):
        id = compound.get( "id" )
        if getattr( id, "isIntegral", False ):
            id = LEGACY_ITEM_NAMES.get( int( id ), str( int( id ) ) )
        else:
            id = _string( compound, "id" )

        count = _int( compound, "Count", False )
        if count is None:
            count = _int( compound, "count", False )

        tag = _compound( compound, "tag", False )
        return Item(
            id,
            count,
            _int( compound, "Slot", False ),
            None if tag is None else Book.fromNBT( tag )
        )

    def __repr__( self ):
        return "Item('{}', count={}, slot={})".format( self.id, self.count, self.slot )

def _items( compound ):
    items = _list( compound, "Items", TAG_COMPOUND, False )
    if items is not None:
        return [ Item.fromNBT( item ) for item in items ]
    #Lecterns hold a single book in "Book" instead of an item list
    book = _compound( compound, "Book", False )
    if book is not None:
        return [ Item.fromNBT( book ) ]
    return None


class BlockEntity:
    """
    A block entity (tile entity): extra data attached to a block such as a sign or a chest.
    signLines is a list of four str-or-None entries (raw, as stored in the save), or None if the block entity has no sign text.
    items is a list of Item, or None if the block entity isn't a container.
    """
    __slots__ = ( "id", "x", "y", "z", "signLines", "items" )

    def __init__( self, id, x, y, z, signLines=None, items=None ):
        self.id        = id
        self.x         = x
        self.y         = y
        self.z         = z
        self.signLines = signLines
        self.items     = items

    @staticmethod
    def fromNBT( compound, frontText=False ):
        """
        Builds a BlockEntity from a block entity compound.
        If frontText is True, signs saved in the 1.20+ layout (front_text.messages) are also understood.
        """
        return BlockEntity(
            _string( compound, "id" ),
            _int( compound, "x" ),
            _int( compound, "y" ),
            _int( compound, "z" ),
            _signLines( compound, frontText ),
            _items( compound )
        )

    def getPos( self ):
        return ( self.x, self.y, self.z )
    pos = property( getPos )

    def __repr__( self ):
        return "BlockEntity('{}', {:d}, {:d}, {:d})".format( self.id, self.x, self.y, self.z )

def _signLines( compound, frontText ):
    lines = [ _string( compound, name, False ) for name in SIGN_LINE_NAMES ]
    if any( line is not None for line in lines ):
        return lines
    if frontText:
        messages = compound.rget( "front_text", "messages" )
        if getattr( messages, "isList", False ) and messages.listTagType == TAG_STRING:
            lines = [ str( message ) for message in messages[:4] ]
            return lines + [ None ] * ( 4 - len( lines ) )
    return None


class Entity:
    """
    An entity (mob, dropped item, etc).
    pos is a tuple of three floats; item is the Item carried by an item entity, or None.
    """
    __slots__ = ( "id", "pos", "item" )

    def __init__( self, id, pos, item=None ):
        self.id   = id
        self.pos  = pos
        self.item = item

    @staticmethod
    def fromNBT( compound ):
        pos = _field( compound, "Pos", "isList", True )
        if len( pos ) != 3 or not all( getattr( p, "isNumeric", False ) and math.isfinite( p ) for p in pos ):
            raise ChunkFormatError( "Field \"Pos\" must hold three finite numbers." )
        item = _compound( compound, "Item", False )
        return Entity(
            _string( compound, "id" ),
            tuple( float( p ) for p in pos ),
            None if item is None else Item.fromNBT( item )
        )

    def __repr__( self ):
        return "Entity('{}', {})".format( self.id, self.pos )


class ChunkView:
    """The block entities and entities of a single chunk, independent of the layout it was saved in."""
    __slots__ = ( "blockEntities", "entities" )

    def __init__( self, blockEntities=(), entities=() ):
        self.blockEntities = list( blockEntities )
        self.entities      = list( entities )

    def __repr__( self ):
        return "ChunkView({:d} block entities, {:d} entities)".format( len( self.blockEntities ), len( self.entities ) )


class LegacyChunk:
    """Chunk layout used up to 1.16: Level.TileEntities and Level.Entities."""
    name = "legacy"

    @staticmethod
    def fromNBT( doc ):
        level = _compound( doc, "Level" )
        return ChunkView(
            [ BlockEntity.fromNBT( te ) for te in _list( level, "TileEntities", TAG_COMPOUND ) ],
            [ Entity.fromNBT( e )       for e  in _list( level, "Entities",     TAG_COMPOUND ) ]
        )

class Chunk1_17:
    """Chunk layout used by 1.17: Level.TileEntities only."""
    name = "1.17"

    @staticmethod
    def fromNBT( doc ):
        level = _compound( doc, "Level" )
        return ChunkView( [ BlockEntity.fromNBT( te ) for te in _list( level, "TileEntities", TAG_COMPOUND ) ] )

class Chunk1_18:
    """Chunk layout used since 1.18: top-level block_entities."""
    name = "1.18"

    @staticmethod
    def fromNBT( doc ):
        return ChunkView( [ BlockEntity.fromNBT( te, True ) for te in _list( doc, "block_entities", TAG_COMPOUND ) ] )

def selectAdapter( version ):
    """
    Returns the chunk adapter (LegacyChunk, Chunk1_17 or Chunk1_18) for worlds saved by the given Version.
    The legacy check comes first: legacy descriptors carry the old version number, which can be larger than any data version.
    """
    if version.isLegacy or version.id <= LAST_LEGACY_ID:
        return LegacyChunk
    elif version.id <= LAST_1_17_ID:
        return Chunk1_17
    return Chunk1_18
