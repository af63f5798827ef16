import math
import unittest

import qnbt

from qnbt import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array
)

#( text, expected tag )
numbers = (
    ( "5",          TAG_Int( 5 )              ),
    ( "-5",         TAG_Int( -5 )             ),
    ( "+5",         TAG_Int( 5 )              ),
    ( "127b",       TAG_Byte( 127 )           ),
    ( "-128B",      TAG_Byte( -128 )          ),
    ( "5s",         TAG_Short( 5 )            ),
    ( "5L",         TAG_Long( 5 )             ),
    ( "5l",         TAG_Long( 5 )             ),
    ( "3000000000L", TAG_Long( 3000000000 )   ),
    ( "1.5",        TAG_Double( 1.5 )         ),
    ( "1.",         TAG_Double( 1.0 )         ),
    ( ".5",         TAG_Double( 0.5 )         ),
    ( "1e3",        TAG_Double( 1000.0 )      ),
    ( "5d",         TAG_Double( 5.0 )         ),
    ( "1.5f",       TAG_Float( 1.5 )          ),
    ( "0.1F",       TAG_Float( 0.1 )          ),
    ( "true",       TAG_Byte( 1 )             ),
    ( "false",      TAG_Byte( 0 )             )
)

bad_numbers = (
    "300b",
    "-129b",
    "32768s",
    "2147483648",
    "9223372036854775808L",
    "1.5b",
    "1e3L",
    "1.2.3",
    "12abc",
    "1e999",
    "1e39f",
    "-.5.5"
)

class TestValues( unittest.TestCase ):
    def test_numbers( self ):
        for text, expected in numbers:
            with self.subTest( text=text ):
                tag = qnbt.parse( text )
                self.assertEqual( tag.tagType, expected.tagType )
                self.assertEqual( tag, expected )

    def test_bad_numbers( self ):
        for text in bad_numbers:
            with self.subTest( text=text ):
                with self.assertRaises( qnbt.InvalidNumberError ):
                    qnbt.parse( text )

    def test_special_floats( self ):
        tag = qnbt.parse( "NaNd" )
        self.assertEqual( tag.tagType, qnbt.TAG_DOUBLE )
        self.assertTrue( math.isnan( tag ) )
        self.assertEqual( qnbt.parse( "-Infinityf" ), TAG_Float( -math.inf ) )
        self.assertEqual( qnbt.parse( "+InfinityD" ), TAG_Double( math.inf ) )
        #Without a suffix, these are just strings
        self.assertEqual( qnbt.parse( "NaN" ), TAG_String( "NaN" ) )
        self.assertEqual( qnbt.parse( "Infinity" ).tagType, qnbt.TAG_STRING )

    def test_strings( self ):
        self.assertEqual( qnbt.parse( "hello" ), TAG_String( "hello" ) )
        self.assertEqual( qnbt.parse( "a.b-c_d+e" ), TAG_String( "a.b-c_d+e" ) )
        self.assertEqual( qnbt.parse( '"hello world"' ), TAG_String( "hello world" ) )
        self.assertEqual( qnbt.parse( "'say \"hi\"'" ), TAG_String( 'say "hi"' ) )
        self.assertEqual( qnbt.parse( '"it\'s"' ), TAG_String( "it's" ) )
        self.assertEqual( qnbt.parse( r'"a\nb\t\\\"\'"' ), TAG_String( "a\nb\t\\\"'" ) )
        self.assertEqual( qnbt.parse( r'"\u0041\u00e9"' ), TAG_String( "Aé" ) )
        self.assertEqual( qnbt.parse( '""' ), TAG_String( "" ) )

    def test_string_errors( self ):
        with self.assertRaises( qnbt.InvalidEscapeError ):
            qnbt.parse( r'"\x41"' )
        with self.assertRaises( qnbt.InvalidEscapeError ):
            qnbt.parse( r'"\u00g1"' )
        with self.assertRaises( qnbt.UnterminatedStringError ) as cm:
            qnbt.parse( '{a:"abc}' )
        self.assertEqual( cm.exception.position, 3 )
        with self.assertRaises( qnbt.UnterminatedStringError ):
            qnbt.parse( '"abc\\' )

class TestContainers( unittest.TestCase ):
    def test_compound( self ):
        tag = qnbt.parse( ' { a : 1b , "b c" : \'x\' , d:{} } ' )
        self.assertEqual( list( tag ), [ "a", "b c", "d" ] )
        self.assertEqual( tag["a"], TAG_Byte( 1 ) )
        self.assertEqual( tag["b c"], TAG_String( "x" ) )
        self.assertEqual( tag["d"], TAG_Compound() )

    def test_duplicate_keys( self ):
        tag = qnbt.parse( "{a:1,b:2,a:3}" )
        self.assertEqual( list( tag ), [ "a", "b" ] )
        self.assertEqual( tag["a"], TAG_Int( 3 ) )

    def test_list( self ):
        tag = qnbt.parse( "[1,2,3]" )
        self.assertEqual( tag.listTagType, qnbt.TAG_INT )
        self.assertEqual( tag, [ 1, 2, 3 ] )
        self.assertEqual( qnbt.parse( "[]" ).listTagType, qnbt.TAG_END )
        self.assertEqual( qnbt.parse( "[[],[1b]]" ), TAG_List( [ TAG_List(), TAG_List( [ TAG_Byte( 1 ) ] ) ] ) )

    def test_mixed_list( self ):
        with self.assertRaises( qnbt.MixedListError ) as cm:
            qnbt.parse( "[1,2b]" )
        e = cm.exception
        self.assertEqual( e.expected, qnbt.TAG_INT )
        self.assertEqual( e.given, qnbt.TAG_BYTE )
        self.assertEqual( e.position, 3 )

    def test_arrays( self ):
        self.assertEqual( qnbt.parse( "[B;1b,2,-3]" ), TAG_Byte_Array( [ 1, 2, -3 ] ) )
        self.assertEqual( qnbt.parse( "[I; 1, 2]" ), TAG_Int_Array( [ 1, 2 ] ) )
        self.assertEqual( qnbt.parse( "[ l ; 1L, 3000000000 ]" ), TAG_Long_Array( [ 1, 3000000000 ] ) )
        self.assertEqual( qnbt.parse( "[I;]" ), TAG_Int_Array() )
        #An array is not a list
        self.assertNotEqual( qnbt.parse( "[I;1]" ), TAG_List( [ 1 ], TAG_Int ) )

    def test_array_errors( self ):
        with self.assertRaises( qnbt.InvalidNumberError ):
            qnbt.parse( "[B;300]" )
        with self.assertRaises( qnbt.MixedListError ) as cm:
            qnbt.parse( "[B;1,1s]" )
        self.assertEqual( cm.exception.expected, qnbt.TAG_BYTE )
        self.assertEqual( cm.exception.given, qnbt.TAG_SHORT )
        with self.assertRaises( qnbt.MixedListError ):
            qnbt.parse( "[I;1,2.5]" )
        with self.assertRaises( qnbt.MixedListError ):
            qnbt.parse( "[L;a]" )

class TestErrors( unittest.TestCase ):
    def test_missing_value( self ):
        with self.assertRaises( qnbt.MissingValueError ) as cm:
            qnbt.parse( "{foo:}" )
        self.assertEqual( cm.exception.position, 5 )
        self.assertIsInstance( cm.exception, qnbt.UnexpectedTokenError )
        with self.assertRaises( qnbt.MissingValueError ):
            qnbt.parse( "[,]" )

    def test_trailing_comma( self ):
        for text in ( "{a:1,}", "[1,]", "[I;1,]" ):
            with self.subTest( text=text ):
                with self.assertRaises( qnbt.TrailingCommaError ):
                    qnbt.parse( text )

    def test_end( self ):
        for text in ( "", "   ", "{a:1", "[1,2", "{a" ):
            with self.subTest( text=text ):
                with self.assertRaises( qnbt.SNBTEndError ):
                    qnbt.parse( text )

    def test_unexpected( self ):
        with self.assertRaises( qnbt.UnexpectedTokenError ) as cm:
            qnbt.parse( "{a:1} x" )
        self.assertEqual( cm.exception.position, 6 )
        with self.assertRaises( qnbt.UnexpectedTokenError ):
            qnbt.parse( "{a 1}" )
        with self.assertRaises( qnbt.UnexpectedTokenError ):
            qnbt.parse( "{a:1;b:2}" )

    def test_position( self ):
        with self.assertRaises( qnbt.SNBTError ) as cm:
            qnbt.parse( "{\n  a: 1,\n  b: }" )
        e = cm.exception
        self.assertEqual( e.position, 15 )
        self.assertEqual( e.line, 3 )
        self.assertEqual( e.column, 6 )
        self.assertIn( "line 3, column 6", str( e ) )
        self.assertEqual( e.snippet, "  b: }" )
        self.assertIn( "near '  b: }'", str( e ) )

    def test_snippet( self ):
        with self.assertRaises( qnbt.SNBTError ) as cm:
            qnbt.parse( "{name:\"Steve\",pos:[1,2,3],health:20.0f,x:}" )
        #At most 15 characters before the "}"
        self.assertEqual( cm.exception.snippet, "health:20.0f,x:}" )

    def test_long_literal( self ):
        digits = "9" * 5000
        for text, position in ( ( digits, 0 ), ( digits + "L", 0 ), ( "[B;" + digits + "]", 3 ), ( "[L;1," + digits + "]", 5 ) ):
            with self.subTest( position=position ):
                with self.assertRaises( qnbt.InvalidNumberError ) as cm:
                    qnbt.parse( text )
                self.assertEqual( cm.exception.position, position )

    def test_value_error( self ):
        with self.assertRaises( ValueError ):
            qnbt.parse( "{" )

    def test_nesting( self ):
        text = "[" * 10 + "]" * 10
        with self.assertRaises( qnbt.SNBTNestingError ):
            qnbt.parse( text, maxdepth=5 )
        self.assertEqual( qnbt.parse( text, maxdepth=10 ).tagType, qnbt.TAG_LIST )
        with self.assertRaises( qnbt.SNBTNestingError ):
            qnbt.parse( "{a:" * 600 + "1" + "}" * 600 )

if __name__ == "__main__":
    unittest.main()
