import os
import tempfile
import unittest

from signbook import tag
from signbook.region import Region

from nbtutil import encode, makeRegion, rawChunk, corruptChunk


def chunkDoc( n ):
    return encode( { "n": n } )

class TestRegion( unittest.TestCase ):
    def setUp( self ):
        self._dir = tempfile.TemporaryDirectory()
        self.dir = self._dir.name

    def tearDown( self ):
        self._dir.cleanup()

    def writeRegion( self, data, filename="r.0.0.mca" ):
        path = os.path.join( self.dir, filename )
        with open( path, "wb" ) as f:
            f.write( data )
        return Region.fromPath( path )

    def test_from_path( self ):
        r = Region.fromPath( os.path.join( "region", "r.-1.2.mca" ) )
        self.assertEqual( ( r.x, r.z ), ( -1, 2 ) )
        self.assertIsNone( Region.fromPath( "r.a.b.mca" ) )
        self.assertIsNone( Region.fromPath( "r.0.0.mcr" ) )
        self.assertIsNone( Region.fromPath( "r.0.0.mca.bak" ) )

    def test_empty_file( self ):
        region = self.writeRegion( b"" )
        self.assertEqual( list( region.iterChunks() ), [] )
        self.assertEqual( len( region ), 0 )

    def test_no_chunks( self ):
        region = self.writeRegion( bytes( 8192 ) )
        self.assertEqual( list( region ), [] )
        self.assertEqual( len( region ), 0 )

    def test_chunks( self ):
        region = self.writeRegion( makeRegion( {
            ( 3, 0 ):   chunkDoc( 1 ),
            ( 0, 1 ):   chunkDoc( 2 ),
            ( 31, 31 ): chunkDoc( 3 ),
        } ) )
        self.assertEqual( len( region ), 3 )
        found = [ ( lx, lz, tag.read( data )["n"] ) for lx, lz, data in region.iterChunks() ]
        #Chunks come out x-major
        self.assertEqual( found, [ ( 0, 1, 2 ), ( 3, 0, 1 ), ( 31, 31, 3 ) ] )

    def test_unsupported_compression( self ):
        region = self.writeRegion( makeRegion( {
            ( 0, 0 ): rawChunk( chunkDoc( 1 ), 3 ),
            ( 1, 0 ): chunkDoc( 2 ),
        } ) )
        with self.assertLogs( "signbook.region", "WARNING" ) as logs:
            found = [ ( lx, lz ) for lx, lz, data in region ]
        self.assertEqual( found, [ ( 1, 0 ) ] )
        self.assertIn( "unsupported compression type: 3", logs.output[0] )

    def test_corrupt_chunk( self ):
        region = self.writeRegion( makeRegion( {
            ( 0, 0 ): corruptChunk(),
            ( 0, 5 ): chunkDoc( 7 ),
        } ) )
        with self.assertLogs( "signbook.region", "WARNING" ):
            found = [ tag.read( data )["n"] for lx, lz, data in region ]
        self.assertEqual( found, [ 7 ] )

    def test_truncated_table( self ):
        region = self.writeRegion( bytes( 100 ) )
        with self.assertLogs( "signbook.region", "WARNING" ):
            self.assertEqual( list( region ), [] )

    def test_chunk_past_end_of_file( self ):
        data = bytearray( makeRegion( { ( 0, 0 ): chunkDoc( 1 ) } ) )
        data[0:4] = ( ( 50 << 8 ) | 1 ).to_bytes( 4, "big" )
        region = self.writeRegion( bytes( data ) )
        with self.assertLogs( "signbook.region", "WARNING" ):
            self.assertEqual( list( region ), [] )

if __name__ == "__main__":
    unittest.main()
