"""
Writes the signs and books collected from a world to plain text reports.

signs-<save name>.txt:
    ========== sign location: <x>,<y>,<z> ==========
    text: <line 1>
    text: <line 2>
    text: <line 3>
    text: <line 4>
    <blank line>

books-<save name>.txt:
    =========== book location: <x>,<y>,<z> ==========
    title: <title or "unknown">
    author: <author or "unknown">
    pages: <N>
    ---------- page 1 ----------
    <page text, formatting codes stripped>
    ...
    <blank line>
"""
import os.path

from signbook.text import signLineText, stripFormatting

SIGNS_FILENAME = "signs-{}.txt"
BOOKS_FILENAME = "books-{}.txt"

UNKNOWN = "unknown"


def writeSigns( out, signs, version ):
    """
    Writes the given Signs to out, a writable text file-like object.
    version is the world's Version; legacy worlds store plain text lines, newer ones JSON text components.
    """
    legacy = version.isLegacy
    for sign in signs:
        out.write( "========== sign location: {:d},{:d},{:d} ==========\n".format( sign.x, sign.y, sign.z ) )
        for line in sign.lines:
            out.write( "text: {}\n".format( signLineText( line, legacy ) ) )
        out.write( "\n" )

def writeBooks( out, books ):
    """Writes the given BookWithPos to out, a writable text file-like object."""
    for record in books:
        book = record.book
        out.write( "=========== book location: {:d},{:d},{:d} ==========\n".format( record.x, record.y, record.z ) )
        #Writable books have neither a title nor an author
        out.write( "title: {}\n".format( UNKNOWN if book.title is None else book.title ) )
        out.write( "author: {}\n".format( UNKNOWN if book.author is None else book.author ) )
        out.write( "pages: {:d}\n".format( len( book.pages ) ) )
        for number, page in enumerate( book.pages, 1 ):
            out.write( "---------- page {:d} ----------\n".format( number ) )
            out.write( "{}\n".format( stripFormatting( page ) ) )
        out.write( "\n" )

def report( saveName, signs, books, version, directory="." ):
    """
    Writes signs-<saveName>.txt and books-<saveName>.txt to the given directory (the current directory by default).
    Characters that can't be encoded as UTF-8 (lone surrogates from sign JSON) are written as "?".
    Returns a tuple with the paths of the two files.
    """
    signsPath = os.path.join( directory, SIGNS_FILENAME.format( saveName ) )
    booksPath = os.path.join( directory, BOOKS_FILENAME.format( saveName ) )

    with open( signsPath, "w", encoding="utf-8", errors="replace", newline="\n" ) as out:
        writeSigns( out, signs, version )
    with open( booksPath, "w", encoding="utf-8", errors="replace", newline="\n" ) as out:
        writeBooks( out, books )

    return signsPath, booksPath
