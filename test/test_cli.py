import os
import io
import tempfile
import unittest

from contextlib import redirect_stdout

from signbook import cli, util

from nbtutil import makeSave, makeRegion, levelDat, chunk1_18, signNBT


class TestMain( unittest.TestCase ):
    def setUp( self ):
        self._dir = tempfile.TemporaryDirectory()
        self.dir = self._dir.name

    def tearDown( self ):
        util.setMinecraftDir( None )
        self._dir.cleanup()

    def run_main( self, *argv ):
        out = io.StringIO()
        with redirect_stdout( out ):
            code = cli.main( list( argv ) )
        return code, out.getvalue()

    def test_missing_save( self ):
        code, out = self.run_main( "--save", os.path.join( self.dir, "nowhere" ), "--minecraft-dir", self.dir )
        self.assertEqual( code, 1 )
        self.assertIn( "save folder does not exist", out )

    def test_not_a_directory( self ):
        path = os.path.join( self.dir, "file" )
        with open( path, "w" ) as f:
            f.write( "x" )
        code, out = self.run_main( "--save", path )
        self.assertEqual( code, 1 )
        self.assertIn( "save folder is not a directory", out )

    def test_missing_level_dat( self ):
        os.makedirs( os.path.join( self.dir, "nolevel" ) )
        code, out = self.run_main( "--save", os.path.join( self.dir, "nolevel" ) )
        self.assertEqual( code, 1 )
        self.assertIn( "save version does not exist", out )

    def test_unreadable_level_dat( self ):
        path = os.path.join( self.dir, "broken" )
        os.makedirs( path )
        with open( os.path.join( path, "level.dat" ), "wb" ) as f:
            f.write( b"not gzip" )
        code, out = self.run_main( "--save", path )
        self.assertEqual( code, 1 )
        self.assertIn( "failed to read level.dat", out )

    def test_writes_reports( self ):
        path = makeSave( self.dir, "world", levelDat( 2860, "1.18.1" ), {
            "r.0.0.mca": makeRegion( { ( 0, 0 ): chunk1_18( [ signNBT( "minecraft:birch_sign", 3, 4, 5, [ '{"text":"x"}' ] * 4 ) ] ) } )
        } )
        outdir = os.path.join( self.dir, "out" )
        os.makedirs( outdir )
        code, out = self.run_main( "-s", path, "-o", outdir, "-w", "1" )
        self.assertEqual( code, 0 )
        self.assertIn( "world_version: 1.18.1 id: 2860", out )
        with open( os.path.join( outdir, "signs-world.txt" ), encoding="utf-8" ) as f:
            self.assertEqual( f.read(), "========== sign location: 3,4,5 ==========\n" + "text: x\n" * 4 + "\n" )
        self.assertTrue( os.path.isfile( os.path.join( outdir, "books-world.txt" ) ) )

    def test_save_by_name( self ):
        makeSave( os.path.join( self.dir, "saves" ), "Named", levelDat( 2730, "1.17.1" ) )
        outdir = os.path.join( self.dir, "out" )
        os.makedirs( outdir )
        code, out = self.run_main( "-s", "Named", "--minecraft-dir", self.dir, "-o", outdir, "-w", "1" )
        self.assertEqual( code, 0 )
        self.assertTrue( os.path.isfile( os.path.join( outdir, "signs-Named.txt" ) ) )

class TestUtil( unittest.TestCase ):
    def tearDown( self ):
        util.setMinecraftDir( None )

    def test_minecraft_path( self ):
        util.setMinecraftDir( os.path.join( "home", ".minecraft" ) )
        self.assertEqual( util.getMinecraftPath( "saves", "New World" ), os.path.join( "home", ".minecraft", "saves", "New World" ) )

    def test_resolve_save_path( self ):
        with tempfile.TemporaryDirectory() as d:
            os.makedirs( os.path.join( d, "saves", "Survival" ) )
            util.setMinecraftDir( d )
            self.assertEqual( util.resolveSavePath( d ), d )
            self.assertEqual( util.resolveSavePath( "Survival" ), os.path.join( d, "saves", "Survival" ) )
            self.assertEqual( util.resolveSavePath( "Creative" ), "Creative" )

if __name__ == "__main__":
    unittest.main()
