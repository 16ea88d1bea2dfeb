import unittest

from signbook.shared import ChunkFormatError
from signbook.chunk import Book, Item, BlockEntity, Entity, ChunkView
from signbook.extract import extractChunk, isSignID, isBookID, sortKey, Sign


def written( pages=( "p", ), title="T", author="A" ):
    return Item( "minecraft:written_book", 1, 0, Book( list( pages ), title, author ) )

class TestIDs( unittest.TestCase ):
    def test_sign_ids( self ):
        for id in ( "Sign", "minecraft:sign", "minecraft:oak_sign", "minecraft:spruce_wall_sign", "minecraft:cherry_hanging_sign" ):
            self.assertTrue( isSignID( id ), id )
        for id in ( "minecraft:chest", "minecraft:signpost", "Chest" ):
            self.assertFalse( isSignID( id ), id )

    def test_book_ids( self ):
        self.assertTrue( isBookID( "minecraft:written_book" ) )
        self.assertTrue( isBookID( "minecraft:writable_book" ) )
        self.assertFalse( isBookID( "minecraft:enchanted_book" ) )
        self.assertFalse( isBookID( "minecraft:book" ) )
        self.assertFalse( isBookID( "minecraft:bookshelf" ) )

class TestExtractChunk( unittest.TestCase ):
    def test_signs( self ):
        view = ChunkView( [
            BlockEntity( "minecraft:oak_sign", 10, 64, -5, [ "a", "b", "c", "d" ] ),
            BlockEntity( "minecraft:furnace", 0, 0, 0 ),
        ] )
        signs, books = extractChunk( view )
        self.assertEqual( [ ( s.x, s.y, s.z, s.lines ) for s in signs ], [ ( 10, 64, -5, [ "a", "b", "c", "d" ] ) ] )
        self.assertEqual( books, [] )

    def test_sign_missing_line( self ):
        view = ChunkView( [ BlockEntity( "minecraft:oak_sign", 0, 0, 0, [ "a", None, "c", "d" ] ) ] )
        with self.assertRaises( ChunkFormatError ):
            extractChunk( view )

    def test_sign_without_text( self ):
        with self.assertRaises( ChunkFormatError ):
            extractChunk( ChunkView( [ BlockEntity( "minecraft:oak_sign", 0, 0, 0 ) ] ) )

    def test_container_books( self ):
        items = [
            written( ( "one", ) ),
            Item( "minecraft:enchanted_book", 1, 1, Book( [ "nope" ] ) ),
            Item( "minecraft:writable_book", 1, 2, Book( [ "draft" ] ) ),
            Item( "minecraft:written_book", 1, 3, None ),
            Item( "minecraft:written_book", 1, 4, Book( None, "no pages" ) ),
            Item( "minecraft:stone", 64, 5 ),
        ]
        signs, books = extractChunk( ChunkView( [ BlockEntity( "minecraft:chest", 0, 70, 0, None, items ) ] ) )
        self.assertEqual( signs, [] )
        self.assertEqual( [ b.book.pages for b in books ], [ [ "one" ], [ "draft" ] ] )
        self.assertEqual( [ ( b.x, b.y, b.z ) for b in books ], [ ( 0, 70, 0 ), ( 0, 70, 0 ) ] )

    def test_entity_books_floor( self ):
        view = ChunkView( [], [
            Entity( "Item", ( -0.5, 63.9, 10.2 ), written() ),
            Entity( "Item", ( 1.0, 1.0, 1.0 ), Item( "minecraft:diamond", 1 ) ),
            Entity( "Zombie", ( 1.0, 1.0, 1.0 ) ),
        ] )
        signs, books = extractChunk( view )
        self.assertEqual( [ ( b.x, b.y, b.z ) for b in books ], [ ( -1, 63, 10 ) ] )

    def test_sort_key( self ):
        signs = [ Sign( 1, 5, 0, [] ), Sign( 0, 9, 2, [] ), Sign( 0, 3, 2, [] ), Sign( 0, 9, 1, [] ) ]
        signs.sort( key=sortKey )
        self.assertEqual( [ ( s.x, s.y, s.z ) for s in signs ], [ ( 0, 9, 1 ), ( 0, 3, 2 ), ( 0, 9, 2 ), ( 1, 5, 0 ) ] )

if __name__ == "__main__":
    unittest.main()
