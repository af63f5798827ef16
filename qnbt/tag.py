"""
qnbt's tag module provides the in-memory tag tree that every codec reads from and writes to.

Every tag is an instance of one of the TAG_* classes defined here.
Each TAG_* class subclasses the Python type closest to its payload (int, float, str, list, OrderedDict, array),
so tags generally work the same way and in the same places as those types would.
"""
from collections import OrderedDict
from array import array

from qnbt.shared import (
    WrongTagError, ConversionError, MissingTagError, OutOfBoundsError, UnknownTagTypeError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    SIGNED_BYTE_TYPE, SIGNED_INT_TYPE, SIGNED_LONG_TYPE,
    _F,

    assertValidTagType  as _avtt
)

#Base class methods called at various locations
_int_repr       = int.__repr__
_int_eq         = int.__eq__
_int_hash       = int.__hash__
_float_new      = float.__new__
_float_repr     = float.__repr__
_float_eq       = float.__eq__
_float_hash     = float.__hash__
_str_add        = str.__add__
_str_mul        = str.__mul__
_str_repr       = str.__repr__
_array_new      = array.__new__
_array_eq       = array.__eq__
_list_append    = list.append
_list_clear     = list.clear
_list_insert    = list.insert
_list_pop       = list.pop
_list_remove    = list.remove
_list_init      = list.__init__
_list_new       = list.__new__
_list_setitem   = list.__setitem__
_list_delitem   = list.__delitem__
_list_iadd      = list.__iadd__
_list_imul      = list.__imul__
_list_repr      = list.__repr__
_od_setitem     = OrderedDict.__setitem__

#Largest finite value a TAG_Float can hold (FLT_MAX)
FLOAT_MAX = 3.4028234663852886e+38

#Generator that converts values in the given iterable, i, to a deduced tag class if necessary.
#The tag class is deduced by inspecting the first value of the iterable, f, in this order:
#   1. If f is a tag, f's class.
#   2. The tag class mapped to f's Python type.
#If the type cannot be deduced, raises a ConversionError.
#Additionally, the deduced tag class's constructor may also raise exceptions during conversion.
def _TL_init_v2t( i ):
    i = iter( i )
    #Since Python 3.7, StopIteration raised inside of a generator is converted to a RuntimeError,
    #so an empty iterable has to be caught explicitly.
    try:
        f = next( i )
    except StopIteration:
        return

    #First value is a tag.
    if hasattr( f, "tagType" ):
        c = f.__class__
        yield f
    #First value isn't a tag. Try converting the value to its corresponding tag class.
    else:
        c = _tagClassOf( f )
        #If this isn't possible, ConversionError is raised.
        if c is None:
            raise ConversionError( f )
        yield c( f )

    #Convert values in i to the chosen tag class.
    yield from _TL_v2t( i, c )

#Generator that converts values in the given iterable, i, to a deduced tag class if necessary.
#This variant involves t, the tagType of elements stored in a TAG_List, in the type deduction process.
#The tag class is deduced by inspecting the first value of the iterable, f, in this order:
#   1. If f is a tag, f's class.
#   2. If the TAG_List is non-empty, the class of tags stored by the list (e.g. TAG_Int).
#   3. The tag class mapped to f's Python type.
#If the type cannot be deduced, raises a ConversionError.
def _TL_suggest_v2t( i, t ):
    i = iter( i )
    try:
        f = next( i )
    except StopIteration:
        return

    #First value is a tag.
    if hasattr( f, "tagType" ):
        c = f.__class__
        yield f
    #First value isn't a tag. Try converting the value to the type of tags currently stored by the list, t.
    elif t != TAG_END:
        c = _TAGCLASS[t]
        yield c( f )
    #The list is empty. Try converting the value to its corresponding tag class.
    else:
        c = _tagClassOf( f )
        if c is None:
            raise ConversionError( f )
        yield c( f )

    yield from _TL_v2t( i, c )

#Generator that converts non-tag values in the given iterable, i, to the given tag class, c.
#Tags must already be of class c; a tag of any other type raises a WrongTagError.
#Note: c's constructor may raise exceptions during conversion.
def _TL_v2t( i, c ):
    tt = c.tagType
    for v in i:
        t = getattr( v, "tagType", None )
        if t is None:
            yield c( v )
        elif t == tt:
            yield v
        else:
            raise WrongTagError( tt, t )

#Returns __eq__ and __ne__ methods that compare like base_eq, except that tags of different types never compare equal.
#Without this, TAG_Byte( 5 ) == TAG_Int( 5 ) because both are ints.
#Tags still compare equal to plain values, e.g. TAG_Int( 5 ) == 5.
def _makeTypedEquality( base_eq ):
    def __eq__( self, other ):
        t = getattr( other, "tagType", None )
        if t is not None and t != self.tagType:
            return False
        return base_eq( self, other )
    def __ne__( self, other ):
        r = __eq__( self, other )
        return r if r is NotImplemented else not r
    return __eq__, __ne__

#Returns a method that returns the tag it's called on if that tag is of the given class, and raises a WrongTagError otherwise.
def _makeTagViewer( methodname, tagclass ):
    tt = tagclass.tagType
    def viewer( self ):
        if self.tagType != tt:
            raise WrongTagError( tt, self.tagType )
        return self
    viewer.__name__ = methodname
    viewer.__doc__ = \
        """
        {0:}(self) -> {1:}

        Returns this tag if it is a {1:}. Otherwise, raises a WrongTagError.
        """.format( methodname, tagclass.__name__ )
    return viewer

#Returns a TAG_Compound method that returns the tag with the given name, checking that it is of the given class.
def _makeTagGetter( methodname, tagclass ):
    tt = tagclass.tagType
    def getter( self, name ):
        t = self.get( name )
        if t is None:
            raise MissingTagError( name )
        if t.tagType != tt:
            raise WrongTagError( tt, t.tagType )
        return t
    getter.__name__ = methodname
    getter.__doc__ = \
        """
        {0:}(self, name) -> {1:}

        Returns the tag with the given name.
        Raises a MissingTagError (a KeyError) if there is no such tag, or a WrongTagError if the tag isn't a {1:}.
        """.format( methodname, tagclass.__name__ )
    return getter

#Returns a TAG_List method that returns the tag at the given index, checking that it is of the given class.
def _makeListGetter( methodname, tagclass ):
    tt = tagclass.tagType
    def getter( self, index ):
        t = self[ index ]
        if t.tagType != tt:
            raise WrongTagError( tt, t.tagType )
        return t
    getter.__name__ = methodname
    getter.__doc__ = \
        """
        {0:}(self, index) -> {1:}

        Returns the tag at the given index.
        Raises an IndexError if there is no such tag, or a WrongTagError if this isn't a list of {1:}.
        """.format( methodname, tagclass.__name__ )
    return getter

#Returns an NBT class that stores a primitive like byte, short, int, or long.
def _makeIntPrimitiveClass( classname, tt, vmin, vmax, **kwargs ):
    class _IntPrimitiveTag( _BaseIntTag ):
        def __init__( self, value=None ):
            #Note: self is set by int's __new__ prior to calling __init__.
            #self is guaranteed to be an int, unlike value. The only reason the value parameter is here is so __init__ won't raise errors.
            if self < vmin or self > vmax:
                raise OutOfBoundsError( int( self ), vmin, vmax )
        tagType = tt
        min = vmin
        max = vmax
    for n,v in kwargs.items():
        setattr( _IntPrimitiveTag, n, v )

    _IntPrimitiveTag.__name__ = classname
    _IntPrimitiveTag.__qualname__ = classname
    _IntPrimitiveTag.__doc__ = \
        """
        Represents a {0:}.
        {0:} is an int subclass and generally works the same way and in the same places as an int would.
        Constructing a {0:} outside of the range [{1:d}, {2:d}] raises an OutOfBoundsError.
        """.format( classname, vmin, vmax )
    return _IntPrimitiveTag

#Returns an NBT class that stores an array of fixed-width signed integers in the range [vmin, vmax].
def _makeArrayClass( classname, tt, typecode, vmin, vmax, **kwargs ):
    class _ArrayTag( _BaseArrayTag ):
        __slots__ = ()
        tagType = tt
        min = vmin
        max = vmax
        #array implements __new__ rather than __init__
        def __new__( cls, values=() ):
            #bytes-like initializers are raw machine values and always fit.
            #Anything else is read once up front so the out of range value can be reported.
            if not isinstance( values, ( bytes, bytearray, array ) ):
                values = list( values )
            try:
                return _array_new( cls, typecode, values )
            except OverflowError:
                for v in values:
                    if v < vmin or v > vmax:
                        raise OutOfBoundsError( v, vmin, vmax ) from None
                raise
    for n,v in kwargs.items():
        setattr( _ArrayTag, n, v )

    _ArrayTag.__name__ = classname
    _ArrayTag.__qualname__ = classname
    return _ArrayTag

class _BaseTag:
    """Base class for all qnbt tag classes."""
    tagType     = -1

    #Simple means to check if a tag is a specific tagType
    isByte      = False
    isShort     = False
    isInt       = False
    isLong      = False
    isString    = False
    isFloat     = False
    isDouble    = False
    isByteArray = False
    isList      = False
    isCompound  = False
    isIntArray  = False
    isLongArray = False

    #Simple means to check properties of the tag
    isNumeric   = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double
    isIntegral  = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long,
    isReal      = False #True for TAG_Float, TAG_Double
    isArray     = False #True for TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array
    isSequence  = False #True for TAG_String, TAG_Byte_Array, TAG_List, TAG_Int_Array, TAG_Long_Array

    __slots__ = ()

    def expect( self, tagclass ):
        """
        Returns this tag if it is an instance of the given tag class (e.g. qnbt.TAG_Int).
        Otherwise, raises a WrongTagError reporting both tag types.

        Example:
            level = root["Data"].expect( qnbt.TAG_Compound )
        """
        if self.tagType != tagclass.tagType:
            raise WrongTagError( tagclass.tagType, self.tagType )
        return self

class _BaseIntTag( int, _BaseTag ):
    """
    Base class for all primitive integer tags (TAG_Byte, TAG_Short, TAG_Int, TAG_Long).
    Defines two static members min and max that represent the bounds (inclusive) of the range of values that can be represented by that primitive.
    Subclasses implement a constructor that asserts that the given value is within these bounds, and raises an OutOfBoundsError if they are not.
    """
    isNumeric  = True
    isIntegral = True

    value = property( int, doc="Read-only property. Converts this tag to an int." )

    __slots__ = ()

    min =  1
    max = -1

    __eq__, __ne__ = _makeTypedEquality( _int_eq )
    __hash__ = _int_hash

    def __repr__( self ):
        return "{}({})".format( self.__class__.__name__, _int_repr( self ) )

TAG_Byte  = _makeIntPrimitiveClass( "TAG_Byte",  TAG_BYTE,                  -128,                 127, isByte  = True )
TAG_Short = _makeIntPrimitiveClass( "TAG_Short", TAG_SHORT,               -32768,               32767, isShort = True )
TAG_Int   = _makeIntPrimitiveClass( "TAG_Int",   TAG_INT,            -2147483648,          2147483647, isInt   = True )
TAG_Long  = _makeIntPrimitiveClass( "TAG_Long",  TAG_LONG,  -9223372036854775808, 9223372036854775807, isLong  = True )

class TAG_Float( float, _BaseTag ):
    """
    Represents a TAG_Float.
    TAG_Float is a float subclass and generally works the same way and in the same places as a float would.

    The value is rounded to the nearest binary32 value on construction, so what you store is exactly what gets written.
    Constructing a TAG_Float from a finite value too large for binary32 raises an OutOfBoundsError.
    """
    tagType   = TAG_FLOAT
    isFloat   = True
    isNumeric = True
    isReal    = True

    value = property( float, doc="Read-only property. Converts this tag to a float." )

    __slots__ = ()

    def __new__( cls, value=0.0 ):
        v = _float_new( float, value )
        try:
            v = _F.unpack( _F.pack( v ) )[0]
        except OverflowError:
            raise OutOfBoundsError( v, -FLOAT_MAX, FLOAT_MAX ) from None
        return _float_new( cls, v )

    __eq__, __ne__ = _makeTypedEquality( _float_eq )
    __hash__ = _float_hash

    def __repr__( self ):
        return "TAG_Float({})".format( _float_repr( self ) )

class TAG_Double( float, _BaseTag ):
    """
    Represents a TAG_Double.
    TAG_Double is a float subclass and generally works the same way and in the same places as a float would.
    """
    tagType   = TAG_DOUBLE
    isDouble  = True
    isNumeric = True
    isReal    = True

    value = property( float, doc="Read-only property. Converts this tag to a float." )

    __slots__ = ()

    __eq__, __ne__ = _makeTypedEquality( _float_eq )
    __hash__ = _float_hash

    def __repr__( self ):
        return "TAG_Double({})".format( _float_repr( self ) )

class _BaseArrayTag( array, _BaseTag ):
    """Base class for the numeric array tags (TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array)."""
    isArray    = True
    isSequence = True

    __slots__ = ()

    value = property( array.tolist, doc="Read-only property. Converts this tag to a list of ints." )

    __eq__, __ne__ = _makeTypedEquality( _array_eq )

    def __repr__( self ):
        if len( self ) > 0:
            return "{}({})".format( self.__class__.__name__, _list_repr( self.tolist() ) )
        else:
            return "{}()".format( self.__class__.__name__ )

TAG_Byte_Array = _makeArrayClass( "TAG_Byte_Array", TAG_BYTE_ARRAY, SIGNED_BYTE_TYPE, -128, 127, isByteArray = True, __doc__ =
    """
    Represents a TAG_Byte_Array.
    TAG_Byte_Array is a signed 1-byte array subclass and generally works the same way and in the same places any other sequence (tuple, list, array etc) would.

    Values are signed bytes in the range [-128, 127]. A bytes or bytearray initializer is reinterpreted as signed bytes, e.g.
        TAG_Byte_Array( b"\\xff" ) == TAG_Byte_Array( [ -1 ] )
    Use .tobytes() to get the raw bytes back.
    A TAG_Byte_Array may not contain more than 2147483647 bytes (2 GB), however this is not enforced.
    """
)

TAG_Int_Array = _makeArrayClass( "TAG_Int_Array", TAG_INT_ARRAY, SIGNED_INT_TYPE, -2147483648, 2147483647, isIntArray = True, __doc__ =
    """
    Represents a TAG_Int_Array.
    TAG_Int_Array is a signed 4-byte int array subclass and generally works the same way and in the same places any other sequence (tuple, list, array etc) would.

    A TAG_Int_Array may not contain more than 2147483647 integers (8 GiB), however this is not enforced.
    Because this is an array of signed 4-byte integers, its values are limited to a signed 4-byte integer's range: [-2147483648, 2147483647].
    """
)

TAG_Long_Array = _makeArrayClass( "TAG_Long_Array", TAG_LONG_ARRAY, SIGNED_LONG_TYPE, -9223372036854775808, 9223372036854775807, isLongArray = True, __doc__ =
    """
    Represents a TAG_Long_Array.
    TAG_Long_Array is a signed 8-byte int array subclass and generally works the same way and in the same places any other sequence (tuple, list, array etc) would.

    Its values are limited to a signed 8-byte integer's range: [-9223372036854775808, 9223372036854775807].
    """
)

class TAG_String( str, _BaseTag ):
    """
    Represents a TAG_String.
    TAG_String is a str subclass and generally works the same way and in the same places as a str would.

    A TAG_String can be no longer than 65535 bytes when encoded as modified UTF-8.
    This is checked when the string is written, not when it's constructed.
    """
    tagType    = TAG_STRING
    isString   = True
    isSequence = True

    value = property( str, doc="Read-only property. Converts this tag to a str." )

    __slots__ = ()

    #Note: TAG_String overrides methods that modify it in place to return TAG_String, but all other methods return str.
    def __iadd__( self, value ):
        #Note: str doesn't have __iadd__
        return TAG_String( _str_add( self, value ) )

    def __imul__( self, value ):
        #Note: str doesn't have __imul__
        return TAG_String( _str_mul( self, value ) )

    def __repr__( self ):
        return "TAG_String({})".format( _str_repr( self ) )

class TAG_List( list, _BaseTag ):
    """
    Represents a TAG_List.
    TAG_List is a list subclass and generally works the same way and in the same places as a list would.

    Every tag in a TAG_List has the same type, listTagType.
    An empty TAG_List has a listTagType of TAG_END; the first tag added to it decides its listTagType.
    Adding a tag of any other type to a non-empty TAG_List raises a WrongTagError and leaves the list unchanged.
    Non-tag values are converted to the list's tag class.

    A TAG_List may not contain more than 2147483647 entries, however this is not enforced.
    """
    tagType    = TAG_LIST
    isList     = True
    isSequence = True

    __slots__ = "listTagType"

    def __init__( self, iterable=(), listTagType=None ):
        """
        TAG_List constructor.
        Initializes a new TAG_List, optionally with a given iterable.

        iterable is an optional parameter that determines the initial contents of the list. Defaults to an empty tuple.
            iterable's values can be tags (e.g. TAG_String( "Example" ) ) or non-tag values that can be converted to tags (e.g. "Example").
            All tags in a list must be of the same type. If necessary, iterable's values will be converted to the appropriate type of tag for the list.
        listTagType is an optional parameter specifying the type of tags stored by this list.
            This can be None (the default) or a tag class.
            If this is None, the list's tagType is deduced by inspecting the first value of the iterable (if any).
            Typically this parameter is only needed in cases where you're making lists of int/float based tags:
                qnbt.TAG_Byte
                qnbt.TAG_Short
                qnbt.TAG_Int
                qnbt.TAG_Long
                qnbt.TAG_Float
                qnbt.TAG_Double

        Examples:
            #List of strings
            ls = qnbt.TAG_List( ( "Check", "out", "these", "strings!" ) )

            #Numbers 0-9 as a list of TAG_Int
            ls = qnbt.TAG_List( range(10), qnbt.TAG_Int )

            #List of coordinates as TAG_Double
            ls = qnbt.TAG_List( ( 100.21, 60, -500.852 ), qnbt.TAG_Double )
        """
        if listTagType is None:
            _list_init( self, _TL_init_v2t( iterable ) )
        else:
            _avtt( listTagType.tagType )
            _list_init( self, _TL_v2t( iterable, listTagType ) )

        if len( self ) > 0:
            self.listTagType = self[0].tagType
        else:
            self.listTagType = TAG_END

    def __iadd__( self, value ):
        #Convert everything before extending so a bad value leaves the list unchanged
        if len( self ) > 0:
            _list_iadd( self, list( _TL_v2t( value, _TAGCLASS[ self.listTagType ] ) ) )
        else:
            _list_iadd( self, list( _TL_init_v2t( value ) ) )
            if len( self ) > 0:
                self.listTagType = self[0].tagType

        return self

    def __imul__( self, value ):
        if value <= 0:
            self.listTagType = TAG_END
        _list_imul( self, value )
        return self

    def __setitem__( self, key, value ):
        """
        Handle self[key] = value.

        If key is an int, value should be a single value. For example:
            list[0] = qnbt.TAG_String( "Example" )
            list[1] = "Another Example"
        If key is a slice, value should be an iterable (list, tuple, generator, etc) of values. For example:
            list[:]   = ( TAG_Int(5), 6, 7, 8 )
            list[2:4] = ()
        If key isn't an int or a slice, TypeError is raised.

        If only part of the list is being replaced:
            Given values must be tags of the list's type, or non-tags that will be converted to it.
        If the entire list is being replaced (or its only tag):
            The list takes the tag type of the first/only value.
            If the first value isn't a tag, values will be converted to the type of tags currently stored by the list.
            If the list is empty, then values are converted to the tag class mapped to the first/only value's Python type.
        A tag of the wrong type raises a WrongTagError, and a non-tag that can't be converted raises a ConversionError.
        """
        ml = len( self )
        #Add, remove, or replace tags in a slice, e.g. list[1:4] = (1,2,3)
        if isinstance( key, slice ):
            sl = len( range( *key.indices( ml ) ) )

            #Replace the entire list's contents. This may possibly change the list tagType.
            if ml == sl:
                _list_setitem( self, key, _TL_suggest_v2t( value, self.listTagType ) )
                self.listTagType = self[0].tagType if len( self ) > 0 else TAG_END
            #Replace some of the list's contents, values must be of the existing tagType
            else:
                _list_setitem( self, key, _TL_v2t( value, _TAGCLASS[ self.listTagType ] ) )
        #Replace a single tag...
        elif isinstance( key, int ):
            t = getattr( value, "tagType", None )
            #Change the list tagType if we're replacing our only tag.
            if ml == 1:
                if t is None:
                    value = _TAGCLASS[ self.listTagType ]( value )
                else:
                    _list_setitem( self, key, value )
                    self.listTagType = t
                    return
            #If we have several tags, the replacement tag needs to match the tagType of the rest of the tags.
            elif ml > 0:
                ltt = self.listTagType
                if t is None:
                    value = _TAGCLASS[ ltt ]( value )
                elif t != ltt:
                    raise WrongTagError( ltt, t )
            _list_setitem( self, key, value )
        #Invalid key, let list.__setitem__ throw a TypeError
        else:
            _list_setitem( self, key, None )

    def __delitem__( self, key ):
        _list_delitem( self, key )
        if len( self ) == 0:
            self.listTagType = TAG_END

    def __repr__( self ):
        if len( self ) > 0:
            return "TAG_List({})".format( _list_repr( self ) )
        else:
            return "TAG_List()"

    def _getValue( self ):
        l = []
        for v in self:
            _list_append( l, v.value )
        return l

    value = property( _getValue, doc="Read-only property. Converts this tag to a list, converting every tag in it to a plain Python value as well." )

    def append( self, value ):
        """
        Appends value to the end of this TAG_List.
        value can be a tag of the list's type (any type if the list is empty) or a non-tag that can be converted to it.
        """
        _list_append( self, self._a( value ) )

    def clear( self ):
        _list_clear( self )
        self.listTagType = TAG_END

    def copy( self ):
        l = _list_new( TAG_List )
        l.listTagType = self.listTagType
        super( TAG_List, l ).__iadd__( self )
        return l

    def extend( self, iterable ):
        self.__iadd__( iterable )

    def insert( self, index, value ):
        _list_insert( self, index, self._a( value ) )

    def pop( self, *args, **kwargs ):
        v = _list_pop( self, *args, **kwargs )
        if len( self ) == 0:
            self.listTagType = TAG_END
        return v

    def remove( self, value ):
        _list_remove( self, value )
        if len( self ) == 0:
            self.listTagType = TAG_END

    #Called by append() and insert().
    #Changes the list tagType and/or converts the value to a TAG_* of the appropriate type if necessary.
    #Returns the (possibly converted) value.
    def _a( self, value ):
        ltt = self.listTagType
        t = getattr( value, "tagType", None )
        #List is empty
        if ltt == TAG_END:
            #value isn't a tag
            if t is None:
                c = _tagClassOf( value )
                #No mapped conversion for this type
                if c is None:
                    raise ConversionError( value )
                value = c( value )
                t = c.tagType
            #Update the list tagType
            self.listTagType = t
        #List is non-empty, value isn't a tag
        elif t is None:
            value = _TAGCLASS[ltt]( value )
        #List is non-empty, value is a tag of the wrong type
        elif t != ltt:
            raise WrongTagError( ltt, t )
        return value

class TAG_Compound( OrderedDict, _BaseTag ):
    """
    Represents a TAG_Compound.
    TAG_Compound is an OrderedDict subclass and generally works the same way and in the same places any other mapping (dict, etc.) would, with one major exception:
    The keys and values of a TAG_Compound are restricted to str and TAG_* objects (e.g. TAG_Byte, TAG_Compound, etc) respectively.

    Tags are kept in the order they were first inserted; replacing a tag keeps its position.
    This order is what gets written, and two TAG_Compounds only compare equal if their tags are in the same order.

    A TAG_Compound can be initialized in the same ways a normal dict / OrderedDict can:
        * TAG_Compound( { k: v, ... } ):  From another mapping (e.g. dict, OrderedDict, etc).
        * TAG_Compound( [ (k,v), ... ] ): With an iterable of pairs (where pair = an iterable containing a key and value, in that order)
        * TAG_Compound( name=v, ... ):    With keyword arguments. Can be combined with either of the previous two choices.
    """
    tagType = TAG_COMPOUND
    isCompound = True

    __slots__ = ()

    def __setitem__( self, key, value ):
        """
        Handle self[key] = value.

        key must be a str. If it isn't, TypeError is raised.

        value can be a tag or a non-tag.
        If a non-tag is provided, it is converted to a tag according to the following rules:
            If a tag with the given name already exists, value is converted to the existing tag's type.
            If no such tag exists, value is converted to the tag class mapped to the value's Python type.
            If both of these attempts fail, a ConversionError is raised.
        If a conversion is performed, the tag constructor may raise an exception.

        Examples:
            comp["str"]  = qnbt.TAG_String( "Example!" )
            comp["byte"] = qnbt.TAG_Byte( 5 )

            comp["str"] = "Another example!"
            comp["byte"] = -5
        """
        #Ensure key is a str and value is a tag
        if not isinstance( key, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )

        #If value is a non tag, attempt to convert it to a tag.
        if not hasattr( value, "tagType" ):
            #If there is an existing tag with the given name, convert the value to the existing tag's type.
            temp = self.get( key )
            if temp is None:
                #Otherwise, see if we can determine the tag class from the python type.
                temp = _tagClassOf( value )
                if temp is None:
                    raise ConversionError( value )
                value = temp( value )
            else:
                value = temp.__class__( value )

        _od_setitem( self, key, value )

    def _getValue( self ):
        d = {}
        for n,v in self.items():
            d[n] = v.value
        return d

    value = property( _getValue, doc="""
        Read-only property. Converts this tag to a dict (in the same order), converting every tag in it to a plain Python value as well:
            TAG_Byte, TAG_Short, TAG_Int, TAG_Long        -> int
            TAG_Float, TAG_Double                         -> float
            TAG_String                                    -> str
            TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array -> list of ints
            TAG_List                                      -> list
            TAG_Compound                                  -> dict
        """
    )

    #Note: No __repr__ override necessary, OrderedDict inserts the correct classname for us

    def copy( self ):
        return TAG_Compound( self )

#Tuple of tag classes indexed by tagType.
#Do _TAGCLASS[tagType] to get the class for the tag with that tagType.
_TAGCLASS = (
    None,           #TAG_END
    TAG_Byte,       #TAG_BYTE
    TAG_Short,      #TAG_SHORT
    TAG_Int,        #TAG_INT
    TAG_Long,       #TAG_LONG
    TAG_Float,      #TAG_FLOAT
    TAG_Double,     #TAG_DOUBLE
    TAG_Byte_Array, #TAG_BYTE_ARRAY
    TAG_String,     #TAG_STRING
    TAG_List,       #TAG_LIST
    TAG_Compound,   #TAG_COMPOUND
    TAG_Int_Array,  #TAG_INT_ARRAY
    TAG_Long_Array  #TAG_LONG_ARRAY
)

#Typed views (e.g. tag.asInt()), indexed like _TAGCLASS.
_VIEWERS = (
    None,
    "asByte",
    "asShort",
    "asInt",
    "asLong",
    "asFloat",
    "asDouble",
    "asByteArray",
    "asString",
    "asList",
    "asCompound",
    "asIntArray",
    "asLongArray"
)

#Typed getters (e.g. compound.get_int( "name" ), list.get_int( 0 )), indexed like _TAGCLASS.
_GETTERS = (
    None,
    "get_byte",
    "get_short",
    "get_int",
    "get_long",
    "get_float",
    "get_double",
    "get_byte_array",
    "get_string",
    "get_list",
    "get_compound",
    "get_int_array",
    "get_long_array"
)

#Note: Have to create these methods here because the target classes don't exist until this point:
for _c, _v, _g in zip( _TAGCLASS[1:], _VIEWERS[1:], _GETTERS[1:] ):
    setattr( _BaseTag,     _v, _makeTagViewer( _v, _c ) )
    setattr( TAG_Compound, _g, _makeTagGetter( _g, _c ) )
    setattr( TAG_List,     _g, _makeListGetter( _g, _c ) )
del _c, _v, _g

#Mapping of python types -> tag classes.
#NBT doesn't have a boolean type. Instead, a TAG_Byte with a value of 0 for False and 1 for True is usually used instead.
#Therefore, we map the python bool type to TAG_Byte.
#Tag type deduction is not possible for the int and float python types because it would be ambiguous;
#int could be deduced as TAG_Byte, TAG_Short, TAG_Int, or TAG_Long,
#and float could be deduced as TAG_Float or TAG_Double.
_TAGMAP = {
    bool:        TAG_Byte,
    bytes:       TAG_Byte_Array,
    bytearray:   TAG_Byte_Array,
    str:         TAG_String,
    list:        TAG_List,
    tuple:       TAG_List,
    dict:        TAG_Compound,
    OrderedDict: TAG_Compound
}

#Mapping of array typecodes -> array tag classes.
_ARRAYMAP = {
    SIGNED_BYTE_TYPE: TAG_Byte_Array,
    SIGNED_INT_TYPE:  TAG_Int_Array,
    SIGNED_LONG_TYPE: TAG_Long_Array
}

def _tagClassOf( value ):
    """Returns the tag class that a non-tag value converts to, or None if there isn't one."""
    if value.__class__ is array:
        return _ARRAYMAP.get( value.typecode )
    return _TAGMAP.get( value.__class__ )

def tagClass( tagType ):
    """
    Returns the tag class (e.g. TAG_Int) for the given numerical tagType.
    Raises UnknownTagTypeError if tagType is unknown, or is TAG_END (which has no class).
    """
    if tagType == TAG_END:
        raise UnknownTagTypeError( tagType )
    _avtt( tagType )
    return _TAGCLASS[ tagType ]
