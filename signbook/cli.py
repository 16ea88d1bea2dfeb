"""Command line entry point: signbook --save <path to world>"""
import os
import os.path
import argparse
import logging

from signbook.shared import NBTFormatError, WorldError
from signbook.util   import setMinecraftDir, resolveSavePath
from signbook.world  import World, LOG_FORMAT
from signbook.report import report

logger = logging.getLogger( __name__ )


def main( argv=None ):
    parser = argparse.ArgumentParser( prog="signbook", description="Extract sign text and book contents from a Minecraft Java Edition save." )
    parser.add_argument( "-s", "--save", required=True, help="Minecraft save folder, or the name of a world in the Minecraft saves folder" )
    parser.add_argument( "-o", "--output-dir", default=".", help="Directory to write signs-<save>.txt and books-<save>.txt to" )
    parser.add_argument( "-w", "--workers", type=int, default=None, help="Number of worker processes (defaults to the number of CPUs)" )
    parser.add_argument( "--minecraft-dir", default=None, help="Minecraft installation directory used to look up worlds by name" )
    parser.add_argument( "-v", "--verbose", action="store_true", help="Log debugging output" )
    args = parser.parse_args( argv )

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT
    )

    if args.minecraft_dir is not None:
        setMinecraftDir( args.minecraft_dir )

    path = resolveSavePath( args.save )
    if not os.path.exists( path ):
        print( "save folder does not exist" )
        return 1
    if not os.path.isdir( path ):
        print( "save folder is not a directory" )
        return 1
    if not os.path.isfile( os.path.join( path, "level.dat" ) ):
        print( "save version does not exist" )
        return 1

    world = World( path )
    try:
        version = world.getVersion()
    except ( NBTFormatError, WorldError, EOFError, OSError ) as e:
        print( "failed to read level.dat: {}".format( e ) )
        return 1
    print( "world_version: {} id: {:d}".format( version.name, version.id ) )

    result = world.extract( args.workers )
    signsPath, booksPath = report( world.name, result.signs, result.books, result.version, args.output_dir )

    logger.info( "wrote %s and %s", signsPath, booksPath )
    logger.info( "done!" )
    return 0


if __name__ == "__main__":
    raise SystemExit( main() )
