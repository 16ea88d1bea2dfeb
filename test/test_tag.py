import io
import os
import gzip
import zlib
import tempfile
import unittest

import signbook
from signbook import tag

from nbtutil import encode, Byte, Short, Int, Long, Float, Double, ByteArray, IntArray, LongArray, List, Compound


example = encode( {
    "byte":      Byte( -3 ),
    "short":     Short( -500 ),
    "int":       Int( -1234567 ),
    "long":      Long( -12345678910111213 ),
    "float":     Float( 52.358924865722656 ),
    "double":    Double( 123.456789101112 ),
    "string":    "This is a string!",
    "compound":  { "name": "Jeff", "id": 5 },
    "list":      [ "Hey!", "Check", "out", "these", "strings!" ],
    "empty":     List( [] ),
    "bytearray": ByteArray( b"\x00\x01\x02\x03" ),
    "intarray":  IntArray( ( 5, 6, -7, 8 ) ),
    "longarray": LongArray( ( 1, -2, 9223372036854775807 ) ),
}, "Example!" )

class TestRead( unittest.TestCase ):
    def test_primitives( self ):
        doc = tag.read( example )
        self.assertEqual( doc.name, "Example!" )
        self.assertEqual( doc["byte"], -3 )
        self.assertEqual( doc["byte"].tagType, signbook.TAG_BYTE )
        self.assertEqual( doc["short"], -500 )
        self.assertEqual( doc["int"], -1234567 )
        self.assertEqual( doc["long"], -12345678910111213 )
        self.assertAlmostEqual( doc["float"], 52.358924865722656, places=4 )
        self.assertAlmostEqual( doc["double"], 123.456789101112 )
        self.assertEqual( doc["string"], "This is a string!" )
        self.assertTrue( doc["string"].isString )

    def test_containers( self ):
        doc = tag.read( example )
        self.assertTrue( doc["compound"].isCompound )
        self.assertEqual( doc["compound"]["name"], "Jeff" )
        self.assertEqual( list( doc["list"] ), [ "Hey!", "Check", "out", "these", "strings!" ] )
        self.assertEqual( doc["list"].listTagType, signbook.TAG_STRING )
        self.assertEqual( len( doc["empty"] ), 0 )
        self.assertEqual( doc["empty"].listTagType, signbook.TAG_END )

    def test_arrays( self ):
        doc = tag.read( example )
        self.assertEqual( doc["bytearray"], b"\x00\x01\x02\x03" )
        self.assertEqual( list( doc["intarray"] ), [ 5, 6, -7, 8 ] )
        self.assertEqual( doc["longarray"].tagType, signbook.TAG_LONG_ARRAY )
        self.assertEqual( list( doc["longarray"] ), [ 1, -2, 9223372036854775807 ] )

    def test_keeps_order( self ):
        doc = tag.read( encode( { "b": 1, "a": 2, "c": 3 } ) )
        self.assertEqual( list( doc.keys() ), [ "b", "a", "c" ] )

    def test_rget( self ):
        doc = tag.read( example )
        self.assertEqual( doc.rget( "compound", "id" ), 5 )
        self.assertEqual( doc.rget( "list", 1 ), "Check" )
        self.assertIsNone( doc.rget( "compound", "missing" ) )
        self.assertIsNone( doc.rget( "list", 10 ) )
        self.assertIsNone( doc.rget( "string", "deeper" ) )
        self.assertIsNone( doc.rget( "longarray", 0 ) )
        self.assertEqual( doc.rget( "nope", "nope", default=7 ), 7 )

    def test_sources( self ):
        with tempfile.TemporaryDirectory() as d:
            raw = os.path.join( d, "raw.nbt" )
            with open( raw, "wb" ) as f:
                f.write( example )
            gz = os.path.join( d, "gzip.nbt" )
            with gzip.open( gz, "wb" ) as f:
                f.write( example )
            zl = os.path.join( d, "zlib.nbt" )
            with open( zl, "wb" ) as f:
                f.write( zlib.compress( example ) )

            for source, compression in ( ( raw, None ), ( gz, "gzip" ), ( zl, "zlib" ) ):
                self.assertEqual( tag.read( source, compression )["int"], -1234567 )
        self.assertEqual( tag.read( io.BytesIO( example ) )["short"], -500 )
        self.assertEqual( tag.read( bytearray( example ) )["short"], -500 )

    def test_modified_utf8( self ):
        #"a\0b" with NUL written the way Java does, and U+1F600 as a surrogate pair
        name = b"\x08\x00\x01s"
        value = b"a\xc0\x80b\xed\xa0\xbd\xed\xb8\x80"
        data = b"\x0a\x00\x00" + name + len( value ).to_bytes( 2, "big" ) + value + b"\x00"
        self.assertEqual( tag.read( data )["s"], "a\0b\U0001F600" )

    def test_sprint( self ):
        doc = tag.read( example )
        text = doc.sprint( maxdepth=1 )
        self.assertTrue( text.startswith( "TAG_Compound(\"Example!\"): 13 entries {" ) )
        self.assertIn( "TAG_List(\"list\"): 5 TAG_Strings [ ... ]", text )
        self.assertIn( "TAG_Compound(\"compound\"): 2 entries { ... }", text )

class TestErrors( unittest.TestCase ):
    def test_root_must_be_compound( self ):
        with self.assertRaises( signbook.WrongTagError ):
            tag.read( b"\x08\x00\x00\x00\x00" )

    def test_truncated( self ):
        with self.assertRaises( EOFError ):
            tag.read( example[:-10] )
        with self.assertRaises( EOFError ):
            tag.read( b"" )

    def test_unknown_tag_type( self ):
        with self.assertRaises( signbook.UnknownTagTypeError ):
            tag.read( b"\x0a\x00\x00\x0d\x00\x01x\x00" )

    def test_negative_length( self ):
        with self.assertRaises( signbook.OutOfBoundsError ):
            tag.read( b"\x0a\x00\x00\x0b\x00\x01x\xff\xff\xff\xff\x00" )

    def test_duplicate_name( self ):
        data = b"\x0a\x00\x00" + b"\x01\x00\x01x\x01" + b"\x01\x00\x01x\x02" + b"\x00"
        with self.assertRaises( signbook.DuplicateNameError ):
            tag.read( data )

    def test_errors_are_nbt_format_errors( self ):
        for cls in ( signbook.WrongTagError, signbook.UnknownTagTypeError, signbook.OutOfBoundsError, signbook.DuplicateNameError, signbook.ChunkFormatError ):
            self.assertTrue( issubclass( cls, signbook.NBTFormatError ) )

if __name__ == "__main__":
    unittest.main()
