#!/usr/bin/env python3
"""
Example usage of the XML/JSON converter.

This script converts a small XML document to JSON, converts the JSON back
to XML and shows what a malformed document reports.
"""

from xml_json_converter import DocumentConverter, InputFormat


SAMPLE_XML = (
    '<library open="true">'
    '<name>City Library</name>'
    '<book id="b1" lang=\'en\'>Dune</book>'
    '<book id="b2">Solaris</book>'
    '<address><street>Main St</street><number>12</number></address>'
    '<archive/>'
    '</library>'
)


def main():
    """Main example function."""
    print("XML/JSON Converter Example")
    print("=" * 50)

    converter = DocumentConverter()

    print(f"Original XML ({len(SAMPLE_XML)} characters):\n{SAMPLE_XML}\n")

    result = converter.convert(SAMPLE_XML)
    if not result.success:
        print("❌ Conversion failed")
        for error in result.errors or []:
            print(f"   Error: {error}")
        return

    print(f"✅ Converted {result.input_format.value} to {result.output_format.value}:")
    print(result.output)

    back = converter.convert(result.output, InputFormat.JSON)
    print(f"\n✅ Converted back to {back.output_format.value}:")
    print(back.output)

    tree = converter.parse(SAMPLE_XML, InputFormat.XML)
    print(f"\nTree has {tree.count_nodes()} nodes and depth {tree.depth()}")

    broken = converter.convert('<library><name>City Library</library>')
    print("\n❌ Malformed input:")
    for error in broken.errors or []:
        print(f"   {error}")

    print()
    print(converter.profiler.export_summary())


if __name__ == "__main__":
    main()
