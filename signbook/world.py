"""
signbook's world module reads a Minecraft save directory and collects every sign and book in it.

Each region file is an independent unit of work: it's decoded, every chunk is adapted to the world's chunk layout,
and the signs and books found are returned as plain lists. Units run in a process pool, and their results are merged
and sorted only after every unit has finished, so the output doesn't depend on scheduling.
"""
import os
import os.path
import logging
import multiprocessing

from signbook            import tag
from signbook.shared     import NBTFormatError, ChunkFormatError, WorldError
from signbook.region     import Region, FMT_FILENAME
from signbook.chunk      import Version, selectAdapter
from signbook.extract    import extractChunk, sortKey

logger = logging.getLogger( __name__ )

#Log format used by the command line and by worker processes
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class Result:
    """The outcome of World.extract(): the world's Version, and its signs and books sorted by (x, z, y)."""
    __slots__ = ( "version", "signs", "books" )

    def __init__( self, version, signs, books ):
        self.version = version
        self.signs   = signs
        self.books   = books

    def __repr__( self ):
        return "Result({!r}, {:d} signs, {:d} books)".format( self.version, len( self.signs ), len( self.books ) )


def extractRegion( path, version ):
    """
    Reads every chunk in the region file at the given path and returns a tuple ( signs, books ).
    version is the Version of the world the region belongs to; it selects how chunks are interpreted.

    Files whose names aren't of the form "r.{x}.{z}.mca" contribute nothing.
    Chunks that can't be decoded are skipped with an error message; the rest of the region is still read.
    """
    region = Region.fromPath( path )
    if region is None:
        return [], []

    adapter = selectAdapter( version )
    logger.info( "---------- reading region: %d, %d ----------", region.x, region.z )

    signs = []
    books = []
    for lx, lz, data in region.iterChunks():
        doc = None
        try:
            doc = tag.read( data )
            chunkSigns, chunkBooks = extractChunk( adapter.fromNBT( doc ) )
        except ( NBTFormatError, EOFError, ValueError, OverflowError, RecursionError ) as e:
            logger.error( "failed to read nbt in chunk: %d, %d with error %s (local chunk %d, %d)", region.x, region.z, e, lx, lz )
            if isinstance( e, ChunkFormatError ) and logger.isEnabledFor( logging.DEBUG ):
                logger.debug( "chunk contents:\n%s", doc.sprint( maxdepth=3, maxlen=16 ) )
            continue
        signs.extend( chunkSigns )
        books.extend( chunkBooks )

    return signs, books

#Pool initializer. Workers started with "spawn" or "forkserver" don't inherit the parent's logging configuration;
#forked workers already have it, and basicConfig() leaves it alone.
def _initWorker( level ):
    logging.basicConfig( level=level, format=LOG_FORMAT )

#Work unit run by the pool. Takes a single argument so it can be used with Pool.map().
#A region that fails outright is reported and contributes nothing; its siblings are unaffected.
def _extractRegionUnit( args ):
    path, version = args
    try:
        return extractRegion( path, version )
    except Exception:
        logger.exception( "skipping region file %s", path )
        return [], []


class World:
    """
    Represents a Minecraft Java Edition save directory.
    Only the overworld's region/ directory is read.
    """
    __slots__ = ( "path", "_leveldata", "_version" )

    def __init__( self, path ):
        """
        Constructor.
        path is the path to the world's directory.
        """
        self.path       = os.fspath( path )
        self._leveldata = None
        self._version   = None

    def getName( self ):
        """Returns the name of the world's directory."""
        return os.path.basename( os.path.normpath( os.path.abspath( self.path ) ) )
    name = property( getName )

    def getLevelData( self ):
        """
        Return this world's level.dat as a NBTDocument.
        Raises WorldError if the world has no level.dat.
        Parse errors (NBTFormatError, EOFError, OSError) propagate.
        """
        ld = self._leveldata
        if ld is None:
            path = os.path.join( self.path, "level.dat" )
            if not os.path.isfile( path ):
                raise WorldError( "\"{}\" does not have a level.dat.".format( self.path ) )
            self._leveldata = ld = tag.read( path, "gzip" )
        return ld
    leveldata = property( getLevelData )

    def getVersion( self ):
        """
        Returns the Version of Minecraft that last saved this world.
        Raises WorldVersionError if level.dat doesn't say.
        """
        v = self._version
        if v is None:
            self._version = v = Version.fromLevelData( self.getLevelData() )
        return v
    version = property( getVersion )

    def iterRegions( self ):
        """
        Iterates over every region in this world's region/ directory, in filename order.
        Files that aren't named like region files are ignored.
        """
        path = os.path.join( self.path, "region" )
        if not os.path.isdir( path ):
            return

        for entry in sorted( os.scandir( path ), key=lambda e: e.name ):
            if entry.is_file():
                region = Region.fromPath( entry.path )
                if region is not None:
                    yield region

    def getRegion( self, rx, rz ):
        """
        Returns the region with the given region coordinates, (rx, rz).
        Returns None if there is no region with these coordinates.
        """
        path = os.path.join( self.path, "region", FMT_FILENAME.format( rx, rz ) )
        if os.path.isfile( path ):
            return Region( rx, rz, path )
        return None

    def extract( self, workers=None ):
        """
        Collects every sign and book in this world and returns a Result.

        workers is the number of worker processes to use. Defaults to the number of CPUs.
            With 1 worker (or a single region), regions are read in this process.

        Raises WorldError (or WorldVersionError) if the world's level.dat is missing or doesn't state a version.
        """
        version = self.getVersion()
        units = [ ( region.path, version ) for region in self.iterRegions() ]

        if workers is None:
            workers = os.cpu_count() or 1

        if workers <= 1 or len( units ) <= 1:
            results = [ _extractRegionUnit( unit ) for unit in units ]
        else:
            with multiprocessing.Pool( processes=min( workers, len( units ) ), initializer=_initWorker, initargs=( logging.getLogger().getEffectiveLevel(), ) ) as pool:
                results = pool.map( _extractRegionUnit, units, chunksize=1 )

        signs = []
        books = []
        for regionSigns, regionBooks in results:
            signs.extend( regionSigns )
            books.extend( regionBooks )

        #list.sort() is stable; records that share a position keep the order they were found in.
        signs.sort( key=sortKey )
        books.sort( key=sortKey )

        logger.info( "found %d signs and %d books in %d regions", len( signs ), len( books ), len( units ) )
        return Result( version, signs, books )

    def __repr__( self ):
        return "World('{}')".format( self.path )
