"""
Turns the text stored in signs and books into plain text.

Signs saved by modern versions store each line as a JSON text component, for example:
    {"text":"Hello ","extra":[{"text":"world","color":"red","bold":true}]}
Legacy saves store plain strings.

Book pages may contain legacy formatting codes: a section sign (§) followed by a single character.
    § + k creates randomly changing characters.
    § + l creates bold text.
    § + m creates strikethrough text.
    § + n creates underlined text.
    § + o creates italic text.
    § + 0 - f (hexadecimal) creates colored text.
    § + r resets any of the previous styles.
"""
import re
import json
import logging

logger = logging.getLogger( __name__ )

SECTION_SIGN = "§"

RE_FORMATTING = re.compile( SECTION_SIGN + "[0-9a-fk-or]", re.IGNORECASE )


def componentText( component ):
    """
    Flattens a decoded JSON text component into plain text.
    Objects contribute "text" followed by the text of each "extra" entry in order; style attributes are dropped.
    Strings contribute themselves, arrays the concatenation of their elements. Anything else contributes nothing.
    """
    if isinstance( component, str ):
        return component
    if isinstance( component, list ):
        return "".join( componentText( part ) for part in component )
    if isinstance( component, dict ):
        text = component.get( "text" )
        parts = [ text if isinstance( text, str ) else "" ]
        extra = component.get( "extra" )
        if isinstance( extra, list ):
            parts.extend( componentText( part ) for part in extra )
        return "".join( parts )
    return ""

def signLineText( line, legacy ):
    """
    Returns the plain text of one sign line.
    If legacy is True the line is already plain text and is returned as-is.
    Otherwise the line is parsed as a JSON text component; a line that isn't valid JSON becomes "".
    """
    if legacy:
        return line
    try:
        component = json.loads( line )
    except ValueError as e:
        logger.debug( "malformed sign line %r: %s", line, e )
        return ""
    return componentText( component )

def stripFormatting( page ):
    """Removes § formatting codes (and any stray §) from the given book page."""
    return RE_FORMATTING.sub( "", page ).replace( SECTION_SIGN, "" )
