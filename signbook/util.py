import os
import os.path
import sys

#Path to the Minecraft installation directory
_mcPath = None

def setMinecraftDir( path ):
    """
    Sets the path returned by getMinecraftPath().
    Passing None restores the default for this operating system.
    """
    global _mcPath
    _mcPath = path

def getDefaultMinecraftDir():
    """
    Return the default Minecraft directory for this operating system.
    Raise an OSError if the operating system is not supported.
    signbook knows the defaults for Windows, Linux, and Mac OS X.
    """
    name = sys.platform
    if   name == "win32":
        return os.path.join( os.environ.get( "APPDATA", os.path.expanduser( "~" ) ), ".minecraft" )
    elif name.startswith( "linux" ):
        return os.path.expanduser( os.path.join( "~", ".minecraft" ) )
    elif name == "darwin": #Mac OS X
        return os.path.expanduser( os.path.join( "~", "Library", "Application Support", "minecraft" ) )
    else:
        raise OSError( "Cannot find .minecraft directory; unsupported operating system." )

def getMinecraftPath( *args ):
    """
    Return the path to the Minecraft installation directory.
    If this path has not manually been set with setMinecraftDir(), the default installation path for the current operating system is used.

    If any positional arguments are given, returns the path resulting from joining the Minecraft installation directory and the given arguments.
    For example, on Linux:
        signbook.getMinecraftPath( "saves", "New World" )
        "/home/<your username>/.minecraft/saves/New World"
    """
    path = _mcPath
    if path is None:
        path = getDefaultMinecraftDir()
    return os.path.join( path, *args )

def resolveSavePath( save ):
    """
    Returns the directory of the save the user asked for.
    save may be a path to a save directory, or the name of a world in the Minecraft saves directory.
    If neither exists, save is returned unchanged so the caller can report it.
    """
    if os.path.exists( save ):
        return save
    try:
        candidate = getMinecraftPath( "saves", save )
    except OSError:
        return save
    if os.path.isdir( candidate ):
        return candidate
    return save
