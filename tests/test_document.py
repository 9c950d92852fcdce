"""Integration tests for HtmlDocument and create_document."""

import unittest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from html5lib.html5parser import ParseError

from htmldom import Config, HtmlDocument, HtmlElement, create_document, createDocument
from htmldom.dom.exceptions import InvalidDocument, UnsupportedSelector

HTML = ('<div id="container" class="main"><p class="text">Hello World</p>'
        '<p class="text">Another Text</p></div>')


class TestDocumentLookups(unittest.TestCase):
    """Lookups on a small container document."""

    def setUp(self):
        self.document = HtmlDocument(HTML)

    def test_get_element_by_id(self):
        element = self.document.get_element_by_id('container')
        self.assertIsInstance(element, HtmlElement)
        self.assertEqual(element.get_attribute('id'), 'container')
        self.assertEqual(element.get_attribute('class'), 'main')

    def test_get_element_by_id_not_found(self):
        self.assertIsNone(self.document.get_element_by_id('unknown'))

    def test_get_element_by_id_empty(self):
        document = HtmlDocument('<div id="">x</div>')
        self.assertIsNone(document.get_element_by_id(''))
        self.assertIsNone(document.getElementById(''))

    def test_get_element_by_id_with_odd_characters(self):
        document = HtmlDocument('<p id="a.b:c">x</p>')
        self.assertEqual(document.get_element_by_id('a.b:c').get_inner_html(), 'x')

    def test_get_elements_by_class_name(self):
        elements = self.document.get_elements_by_class_name('text')
        self.assertEqual(len(elements), 2)
        self.assertEqual(elements[0].get_inner_html(), 'Hello World')
        self.assertEqual(self.document.get_elements_by_class_name('nonexistent'), [])

    def test_get_elements_by_tag_name(self):
        elements = self.document.get_elements_by_tag_name('p')
        self.assertEqual(len(elements), 2)
        self.assertEqual(elements[0].get_inner_html(), 'Hello World')
        self.assertEqual(self.document.get_elements_by_tag_name('nonexistent'), [])

    def test_get_elements_by_tag_name_wildcard(self):
        tags = [element.tag_name for element in self.document.get_elements_by_tag_name('*')]
        self.assertEqual(tags, ['html', 'head', 'body', 'div', 'p', 'p'])

    def test_query_selector(self):
        element = self.document.query_selector('#container')
        self.assertEqual(element.get_attribute('class'), 'main')
        self.assertEqual(self.document.query_selector('p').get_inner_html(), 'Hello World')
        self.assertEqual(self.document.query_selector('html'), self.document.document_element)

    def test_query_selector_not_found(self):
        self.assertIsNone(self.document.query_selector('.nonexistent'))

    def test_query_selector_all(self):
        elements = self.document.query_selector_all('.text')
        self.assertEqual(len(elements), 2)
        self.assertEqual(elements[1].get_inner_html(), 'Another Text')

    def test_query_selector_all_not_found(self):
        self.assertEqual(self.document.query_selector_all('.nonexistent'), [])
        self.assertEqual(self.document.query_selector_all('invalid-selector'), [])

    def test_unsupported_selectors(self):
        with self.assertRaisesRegex(UnsupportedSelector, 'Unsupported selector format: @invalid'):
            self.document.query_selector('@invalid')
        with self.assertRaisesRegex(UnsupportedSelector, r'Unsupported selector format: //\*\['):
            self.document.query_selector('//*[')
        with self.assertRaises(UnsupportedSelector):
            self.document.query_selector_all('div p')

    def test_only_matching_id(self):
        document = HtmlDocument('<p id="foo">a</p><p id="foobar">b</p><p id="bar">c</p>')
        self.assertEqual([e.get_inner_html() for e in document.query_selector_all('#foo')], ['a'])

    def test_structure_properties(self):
        self.assertEqual(self.document.document_element.tag_name, 'html')
        self.assertEqual(self.document.head.tag_name, 'head')
        self.assertEqual(self.document.body.get_first_child().id, 'container')

    def test_camel_case_aliases(self):
        self.assertEqual(self.document.getElementById('container'),
                         self.document.querySelector('#container'))
        self.assertEqual(len(self.document.getElementsByClassName('text')), 2)
        self.assertEqual(len(self.document.getElementsByTagName('p')), 2)
        self.assertEqual(len(self.document.querySelectorAll('p')), 2)


class TestDocumentCreation(unittest.TestCase):
    """Creating elements and round-tripping the document."""

    def setUp(self):
        self.document = HtmlDocument(HTML)

    def test_create_element(self):
        element = self.document.create_element('span')
        element.set_attribute('class', 'highlight')
        self.assertEqual(element.get_attribute('class'), 'highlight')
        self.assertIsNone(element.get_parent())

    def test_create_element_with_text(self):
        element = self.document.createElement('span', 'Text content')
        self.assertEqual(element.get_inner_html(), 'Text content')

    def test_create_element_and_insert_into_dom(self):
        element = self.document.create_element('span')
        element.set_attribute('class', 'highlight')
        container = self.document.get_element_by_id('container')
        container.append_child(element)

        self.assertIn('<span class="highlight"></span>', container.get_inner_html())
        self.assertEqual(self.document.query_selector('.highlight'), element)

    def test_serialize(self):
        self.assertEqual(
            self.document.serialize(),
            '<html><head></head><body>' + HTML + '</body></html>')

    def test_serialize_keeps_doctype(self):
        document = HtmlDocument('<!DOCTYPE html><title>t</title>')
        self.assertTrue(document.serialize().startswith('<!DOCTYPE html><html>'))

    def test_serializer_options_from_config(self):
        config = Config()
        config.set('serializer.alphabetical_attributes', True)
        document = HtmlDocument(HTML, config)
        self.assertIn('<div class="main" id="container">', document.serialize())


class TestDocumentParsing(unittest.TestCase):
    """Construction input checks and parser settings."""

    def test_empty_string(self):
        with self.assertRaises(InvalidDocument):
            HtmlDocument('')

    def test_whitespace_only(self):
        with self.assertRaises(InvalidDocument):
            create_document('  \n\t')

    def test_invalid_types(self):
        for content in [None, 42, ['<p>']]:
            with self.subTest(content=content):
                with self.assertRaises(InvalidDocument):
                    HtmlDocument(content)

    def test_invalid_document_is_value_error(self):
        with self.assertRaises(ValueError):
            HtmlDocument('')

    def test_create_document(self):
        document = createDocument('<p>Hello World</p>')
        self.assertIsInstance(document, HtmlDocument)
        self.assertEqual(document.query_selector('p').get_inner_html(), 'Hello World')

    def test_bytes_input(self):
        document = create_document('<meta charset="utf-8"><p>café</p>'.encode('utf-8'))
        self.assertEqual(document.query_selector('p').get_text_content(), 'café')

    def test_recoverable_errors_are_collected(self):
        document = HtmlDocument('<p>unclosed <b>bold</p>')
        errors = document.get_errors()
        self.assertTrue(errors)
        self.assertTrue(any('expected-doctype-but-got-start-tag' in error for error in errors))
        self.assertEqual(HtmlDocument('<!DOCTYPE html><p>x</p>').get_errors(), [])

    def test_strict_mode_rejects_malformed_markup(self):
        config = Config()
        config.set('parser.strict', True)
        with self.assertLogs('htmldom.dom.document', level='ERROR'):
            with self.assertRaises(InvalidDocument) as ctx:
                HtmlDocument('<p>no doctype</p>', config)
        self.assertIsInstance(ctx.exception.__cause__, ParseError)

    def test_strict_mode_accepts_clean_markup(self):
        config = Config()
        config.set('parser.strict', True)
        document = HtmlDocument(
            '<!DOCTYPE html><html><head><title>t</title></head><body><p>x</p></body></html>',
            config)
        self.assertEqual(document.query_selector('p').get_inner_html(), 'x')

    def test_strict_fragment_errors_propagate(self):
        config = Config()
        config.set('parser.strict', True)
        document = HtmlDocument(
            '<!DOCTYPE html><html><head><title>t</title></head><body><div id="d"></div></body></html>',
            config)
        with self.assertRaises(ParseError):
            document.get_element_by_id('d').insert_adjacent_html('beforeend', '</span>')

    def test_foreign_content(self):
        document = HtmlDocument('<svg><circle r="1"></circle></svg>')
        circle = document.query_selector('circle')
        self.assertEqual(circle.get_attribute('r'), '1')
        self.assertEqual(document.tree.node(circle.index).namespace, 'http://www.w3.org/2000/svg')


if __name__ == '__main__':
    unittest.main()
