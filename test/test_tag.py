import unittest
import struct

import qnbt

from qnbt import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array
)

def f32( v ):
    return struct.unpack( ">f", struct.pack( ">f", v ) )[0]

class TestPrimitives( unittest.TestCase ):
    def test_ranges( self ):
        for c, vmin, vmax in (
            ( TAG_Byte,                  -128,                 127 ),
            ( TAG_Short,               -32768,               32767 ),
            ( TAG_Int,            -2147483648,          2147483647 ),
            ( TAG_Long,  -9223372036854775808, 9223372036854775807 )
        ):
            self.assertEqual( c( vmin ), vmin )
            self.assertEqual( c( vmax ), vmax )
            with self.assertRaises( qnbt.OutOfBoundsError ):
                c( vmin - 1 )
            with self.assertRaises( qnbt.OutOfBoundsError ):
                c( vmax + 1 )

    def test_float_rounding( self ):
        self.assertEqual( TAG_Float( 0.1 ), f32( 0.1 ) )
        self.assertNotEqual( float( TAG_Float( 0.1 ) ), 0.1 )
        self.assertEqual( TAG_Float( float( "inf" ) ), float( "inf" ) )
        with self.assertRaises( qnbt.OutOfBoundsError ):
            TAG_Float( 1e39 )

    def test_variant_equality( self ):
        self.assertNotEqual( TAG_Byte( 5 ), TAG_Int( 5 ) )
        self.assertFalse( TAG_Byte( 5 ) == TAG_Int( 5 ) )
        self.assertEqual( TAG_Int( 5 ), TAG_Int( 5 ) )
        self.assertEqual( TAG_Int( 5 ), 5 )
        self.assertNotEqual( TAG_Float( 0.5 ), TAG_Double( 0.5 ) )
        self.assertEqual( TAG_Double( 0.5 ), 0.5 )
        self.assertNotEqual( TAG_Int_Array( [ 1 ] ), TAG_Long_Array( [ 1 ] ) )
        self.assertEqual( TAG_Int_Array( [ 1, 2 ] ), TAG_Int_Array( [ 1, 2 ] ) )
        self.assertEqual( len( { TAG_Int( 5 ), TAG_Int( 5 ) } ), 1 )

    def test_byte_array( self ):
        a = TAG_Byte_Array( b"\xff\x01" )
        self.assertEqual( a, TAG_Byte_Array( [ -1, 1 ] ) )
        self.assertEqual( a.tobytes(), b"\xff\x01" )
        with self.assertRaises( qnbt.OutOfBoundsError ) as cm:
            TAG_Byte_Array( [ 1, 300 ] )
        self.assertEqual( cm.exception.args, ( 300, -128, 127 ) )

    def test_array_ranges( self ):
        with self.assertRaises( qnbt.OutOfBoundsError ) as cm:
            TAG_Int_Array( v for v in ( 0, 2147483648 ) )
        self.assertEqual( cm.exception.args, ( 2147483648, -2147483648, 2147483647 ) )
        with self.assertRaises( qnbt.OutOfBoundsError ):
            TAG_Long_Array( [ -9223372036854775809 ] )
        self.assertEqual( TAG_Int_Array( range( 3 ) ), TAG_Int_Array( [ 0, 1, 2 ] ) )
        self.assertEqual( TAG_Byte_Array.min, -128 )
        self.assertEqual( TAG_Long_Array.max, 9223372036854775807 )

    def test_repr( self ):
        self.assertEqual( repr( TAG_Int( 5 ) ), "TAG_Int(5)" )
        self.assertEqual( repr( TAG_String( "a" ) ), "TAG_String('a')" )
        self.assertEqual( repr( TAG_Int_Array( [ 1, 2 ] ) ), "TAG_Int_Array([1, 2])" )
        self.assertEqual( repr( TAG_Long_Array() ), "TAG_Long_Array()" )
        self.assertEqual( repr( TAG_List() ), "TAG_List()" )

class TestViews( unittest.TestCase ):
    def test_as( self ):
        t = TAG_Int( 5 )
        self.assertIs( t.asInt(), t )
        self.assertIs( t.expect( TAG_Int ), t )
        with self.assertRaises( qnbt.WrongTagError ) as cm:
            t.asByte()
        self.assertEqual( cm.exception.args, ( qnbt.TAG_BYTE, qnbt.TAG_INT ) )
        with self.assertRaises( TypeError ):
            t.expect( TAG_String )

        c = TAG_Compound()
        self.assertIs( c.asCompound(), c )
        with self.assertRaises( qnbt.WrongTagError ):
            c.asList()
        a = TAG_Long_Array( [ 1 ] )
        self.assertIs( a.asLongArray(), a )
        with self.assertRaises( qnbt.WrongTagError ):
            a.asIntArray()

    def test_typed_getters( self ):
        c = TAG_Compound()
        c["id"] = TAG_Int( 7 )
        c["name"] = TAG_String( "Steve" )
        self.assertEqual( c.get_int( "id" ), 7 )
        self.assertEqual( c.get_string( "name" ), "Steve" )
        with self.assertRaises( qnbt.MissingTagError ):
            c.get_int( "missing" )
        with self.assertRaises( KeyError ):
            c.get_long_array( "missing" )
        with self.assertRaises( qnbt.WrongTagError ) as cm:
            c.get_string( "id" )
        self.assertEqual( cm.exception.args, ( qnbt.TAG_STRING, qnbt.TAG_INT ) )

    def test_list_getters( self ):
        l = TAG_List( [ 10, 20 ], TAG_Int )
        self.assertIs( l.get_int( 1 ), l[1] )
        self.assertEqual( l.get_int( -1 ), 20 )
        with self.assertRaises( qnbt.WrongTagError ) as cm:
            l.get_short( 0 )
        self.assertEqual( cm.exception.args, ( qnbt.TAG_SHORT, qnbt.TAG_INT ) )
        with self.assertRaises( IndexError ):
            l.get_int( 2 )
        with self.assertRaises( IndexError ):
            TAG_List().get_compound( 0 )

class TestValue( unittest.TestCase ):
    def test_scalars( self ):
        for tag, value in ( ( TAG_Byte( 1 ), 1 ), ( TAG_Long( -5 ), -5 ), ( TAG_Double( 0.5 ), 0.5 ), ( TAG_String( "a" ), "a" ) ):
            with self.subTest( tag=tag ):
                self.assertEqual( tag.value, value )
                self.assertIs( type( tag.value ), type( value ) )

    def test_tree( self ):
        tag = qnbt.parse( '{id:7,pos:[0.5d,64d],data:{name:"Steve",flags:[B;1,-1]},longs:[L;1],empty:[]}' )
        value = tag.value
        self.assertEqual( value, {
            "id": 7,
            "pos": [ 0.5, 64.0 ],
            "data": { "name": "Steve", "flags": [ 1, -1 ] },
            "longs": [ 1 ],
            "empty": []
        } )
        self.assertEqual( list( value ), [ "id", "pos", "data", "longs", "empty" ] )
        self.assertIs( type( value ), dict )
        self.assertIs( type( value["pos"] ), list )
        self.assertIs( type( value["pos"][0] ), float )
        self.assertIs( type( value["data"] ), dict )
        self.assertIs( type( value["data"]["name"] ), str )
        self.assertIs( type( value["data"]["flags"] ), list )

    def test_deep( self ):
        tag = TAG_Compound()
        for _ in range( qnbt.MAX_DEPTH - 1 ):
            tag = TAG_Compound( a=tag )
        value = tag.value
        depth = 1
        while value:
            value = value["a"]
            depth += 1
        self.assertEqual( depth, qnbt.MAX_DEPTH )

class TestList( unittest.TestCase ):
    def test_empty( self ):
        l = TAG_List()
        self.assertEqual( l.listTagType, qnbt.TAG_END )
        l.append( TAG_Byte( 1 ) )
        self.assertEqual( l.listTagType, qnbt.TAG_BYTE )
        l.pop()
        self.assertEqual( l.listTagType, qnbt.TAG_END )

    def test_homogeneous( self ):
        l = TAG_List( [ TAG_Int( 1 ) ] )
        with self.assertRaises( qnbt.WrongTagError ) as cm:
            l.append( TAG_String( "x" ) )
        self.assertEqual( cm.exception.args, ( qnbt.TAG_INT, qnbt.TAG_STRING ) )
        self.assertEqual( l, [ 1 ] )
        self.assertEqual( l.listTagType, qnbt.TAG_INT )

        with self.assertRaises( qnbt.WrongTagError ):
            l.insert( 0, TAG_Long( 2 ) )
        with self.assertRaises( qnbt.WrongTagError ):
            l.extend( [ 2, TAG_Long( 3 ) ] )
        self.assertEqual( len( l ), 1 )

        l.append( 2 )
        self.assertEqual( l[1].tagType, qnbt.TAG_INT )
        with self.assertRaises( qnbt.WrongTagError ):
            l[0] = TAG_String( "x" )
        l[0] = 10
        self.assertEqual( l, [ 10, 2 ] )

    def test_replace_only_tag( self ):
        l = TAG_List( [ TAG_Int( 1 ) ] )
        l[0] = TAG_String( "x" )
        self.assertEqual( l.listTagType, qnbt.TAG_STRING )

    def test_conversion( self ):
        self.assertEqual( TAG_List( [ "a", "b" ] ).listTagType, qnbt.TAG_STRING )
        self.assertEqual( TAG_List( range( 3 ), TAG_Short ).listTagType, qnbt.TAG_SHORT )
        with self.assertRaises( qnbt.ConversionError ):
            TAG_List( [ 1, 2 ] )
        with self.assertRaises( qnbt.WrongTagError ):
            TAG_List( [ TAG_Int( 1 ), TAG_Byte( 2 ) ] )

    def test_clear( self ):
        l = TAG_List( [ "a" ] )
        del l[0]
        self.assertEqual( l.listTagType, qnbt.TAG_END )
        l = TAG_List( [ "a", "b" ] )
        l.clear()
        self.assertEqual( l.listTagType, qnbt.TAG_END )

class TestCompound( unittest.TestCase ):
    def test_conversion( self ):
        c = TAG_Compound()
        c["a"] = TAG_Int( 1 )
        c["a"] = 5
        self.assertEqual( c["a"].tagType, qnbt.TAG_INT )
        c["s"] = "text"
        self.assertEqual( c["s"].tagType, qnbt.TAG_STRING )
        c["flag"] = True
        self.assertEqual( c["flag"], TAG_Byte( 1 ) )
        with self.assertRaises( qnbt.ConversionError ):
            c["b"] = 5
        with self.assertRaises( TypeError ):
            c[1] = TAG_Int( 1 )

    def test_order( self ):
        a = TAG_Compound( [ ( "a", TAG_Int( 1 ) ), ( "b", TAG_Int( 2 ) ) ] )
        b = TAG_Compound( [ ( "b", TAG_Int( 2 ) ), ( "a", TAG_Int( 1 ) ) ] )
        self.assertEqual( list( a ), [ "a", "b" ] )
        self.assertNotEqual( a, b )
        a["a"] = TAG_Int( 3 )
        self.assertEqual( list( a ), [ "a", "b" ] )

    def test_remove( self ):
        c = TAG_Compound( a=TAG_Int( 1 ), b=TAG_Int( 2 ) )
        del c["a"]
        self.assertEqual( c.pop( "b" ), 2 )
        self.assertEqual( len( c ), 0 )

class TestTagClass( unittest.TestCase ):
    def test_tagClass( self ):
        self.assertIs( qnbt.tagClass( qnbt.TAG_INT ), TAG_Int )
        self.assertIs( qnbt.tagClass( qnbt.TAG_LONG_ARRAY ), TAG_Long_Array )
        with self.assertRaises( qnbt.UnknownTagTypeError ):
            qnbt.tagClass( qnbt.TAG_END )
        with self.assertRaises( qnbt.UnknownTagTypeError ):
            qnbt.tagClass( 13 )

    def test_describeTag( self ):
        self.assertEqual( qnbt.describeTag( 0 ), "TAG_End (0)" )
        self.assertEqual( qnbt.describeTag( 10 ), "TAG_Compound (10)" )
        self.assertEqual( qnbt.describeTag( 13 ), "Unknown (13)" )

if __name__ == "__main__":
    unittest.main()
