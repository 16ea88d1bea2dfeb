#This module contains code for reading chunks out of MCA (Anvil) region files.
#Anvil was introduced in Minecraft 12w07a (February 15, 2012) and is still used by modern versions of Minecraft at the time of writing.
#
#Region files are divided into 4KiB blocks called sectors.
#Region files start with an 8 KiB large header.
#The first 4 KiB consists of 1024 locations.
#Each location describes where within the region file a particular chunk can be found. Each location is 4 bytes long, and consists of two parts:
#    * Offset:
#      3-byte, big-endian unsigned integer
#      The offset of the chunk within the file, in sectors.
#    * Size:
#      1-byte unsigned integer
#      The size of the chunk, in sectors. A size of 0 means the chunk is absent.
#The remaining 4 KiB consists of 1024 timestamps; we don't need them.
#The location of the chunk with region-local coordinates (x,z) is found at:
#    loff = 4*(x + 32*z)
#Chunks are stored as compressed NBT documents.
#At the start of each chunk is a 5 byte header consisting of two parts:
#    * Length:
#      4-byte, big-endian unsigned integer
#      The length of the remaining chunk data (compression byte included), in bytes.
#    * Compression:
#      1-byte unsigned integer
#      1 = gzip, 2 = zlib, 3 = uncompressed.
#      Vanilla region chunks are always zlib compressed, so that's the only scheme we accept.
#
#Read more about the format here:
#    https://minecraft.wiki/w/Region_file_format

import os
import re
import zlib
import logging

from signbook.shared import read as _r, readUnsignedByte as _rub, readUnsignedInt as _rui, readUnsignedInts as _ruis

logger = logging.getLogger( __name__ )

#Regular expression that matches Anvil filenames; i.e. filenames of the form "r.{x}.{z}.mca" (where x and z are region coordinates)
RE_FILENAME  = re.compile( r"^r\.(-?\d+)\.(-?\d+)\.mca$", re.IGNORECASE )
FMT_FILENAME = "r.{:d}.{:d}.mca"

SECTOR_SIZE = 4096
REGION_SIZE = 32

#Compression types
COMPRESSION_GZIP = 1
COMPRESSION_ZLIB = 2
COMPRESSION_NONE = 3


class Region:
    """
    Represents an MCA region.
    A region consists of a sparsely populated 32x32 grid of chunks.
    """
    __slots__ = ( "x", "z", "path" )

    def __init__( self, rx, rz, path ):
        """
        Constructor.
        rx and rz are the region coordinates.
        path is the path to the region's file.
        """
        self.x    = rx
        self.z    = rz
        self.path = path

    @classmethod
    def fromPath( cls, path ):
        """
        Returns a Region for the file at the given path, or None if its filename isn't of the form "r.{x}.{z}.mca".
        """
        match = RE_FILENAME.fullmatch( os.path.basename( path ) )
        if match is None:
            return None
        return cls( int( match.group( 1 ) ), int( match.group( 2 ) ), path )

    def _readLocations( self, file ):
        """
        Reads the location table from the given readable file-like object, file.
        Returns an array of 1024 locations, or None if the table is truncated.
        """
        try:
            return _ruis( file, REGION_SIZE * REGION_SIZE )
        except EOFError:
            logger.warning( "region %d, %d: location table is truncated; skipping region", self.x, self.z )
            return None

    def _readChunk( self, file, lx, lz, location ):
        """
        Reads and inflates the chunk at the given location.
        Returns the chunk's uncompressed NBT bytes, or None if the chunk had to be skipped.
        """
        offset  = SECTOR_SIZE * ( location >> 8 )

        try:
            file.seek( offset, os.SEEK_SET )
            length      = _rui( file )
            compression = _rub( file )
        except ( OSError, EOFError ) as e:
            logger.warning( "region %d, %d: failed to read header of chunk %d, %d: %s", self.x, self.z, lx, lz, e )
            return None

        if compression != COMPRESSION_ZLIB:
            logger.warning( "unsupported compression type: %d (region %d, %d, chunk %d, %d)", compression, self.x, self.z, lx, lz )
            return None
        if length < 1:
            logger.warning( "region %d, %d: chunk %d, %d has an invalid length of %d", self.x, self.z, lx, lz, length )
            return None

        try:
            data = _r( file, length - 1 )
        except ( OSError, EOFError ) as e:
            logger.warning( "region %d, %d: failed to read chunk %d, %d: %s", self.x, self.z, lx, lz, e )
            return None

        try:
            return zlib.decompress( data )
        except zlib.error as e:
            logger.warning( "region %d, %d: failed to inflate chunk %d, %d: %s", self.x, self.z, lx, lz, e )
            return None

    def iterChunks( self ):
        """
        Generator that iterates over every present chunk in this region.
        For each chunk, yields a tuple ( lx, lz, data ):
            lx and lz are the region-local chunk coordinates, in the range [0,31].
            data is the chunk's uncompressed NBT document, as bytes.
        Absent chunks are skipped silently, malformed ones with a warning.
        An empty file yields nothing.
        """
        if os.path.getsize( self.path ) == 0:
            return

        with open( self.path, "rb" ) as file:
            locations = self._readLocations( file )
            if locations is None:
                return

            for lx in range( REGION_SIZE ):
                for lz in range( REGION_SIZE ):
                    location = locations[ lx + REGION_SIZE * lz ]

                    #Low byte is the sector count; zero means the chunk hasn't been generated.
                    if location & 0xFF == 0:
                        continue

                    data = self._readChunk( file, lx, lz, location )
                    if data is not None:
                        yield lx, lz, data

    def __len__( self ):
        """
        Returns the number of chunks present in this region.
        Returns an int in the range [0, 1024].
        """
        if os.path.getsize( self.path ) == 0:
            return 0
        with open( self.path, "rb" ) as file:
            locations = self._readLocations( file )
        if locations is None:
            return 0
        return sum( 1 for location in locations if location & 0xFF != 0 )

    #Handles iter( region ). Equivalent to region.iterChunks().
    #Allows use of this class in a for loop like so:
    #    for lx, lz, data in region:
    #        ...
    __iter__ = iterChunks

    def __repr__( self ):
        return "Region({:d}, {:d}, '{}')".format( self.x, self.z, self.path )
