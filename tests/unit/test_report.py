# tests/unit/test_report.py
from datetime import datetime

from validade.core.models import Item
from validade.core.report import generate_report


def test_report_block_for_single_item():
    items = [Item(name="Milk", expiry_date="01/01/2030", quantity=2)]
    out = generate_report(items, datetime(2029, 12, 31))
    assert out == (
        "Nome: Milk\n"
        "Data de Validade: 01/01/2030\n"
        "Quantidade: 2\n"
        "Dias p/ vencer: 1\n"
    )


def test_report_blocks_are_separated_by_blank_line_in_order():
    items = [
        Item(name="Milk", expiry_date="01/01/2030", quantity=2),
        Item(name="Bread", expiry_date="03/01/2030", quantity=1),
    ]
    out = generate_report(items, datetime(2029, 12, 31))
    blocks = out.split("\n\n")
    assert len(blocks) == 2
    assert blocks[0].startswith("Nome: Milk")
    assert blocks[1].startswith("Nome: Bread")
    assert "Dias p/ vencer: 3" in blocks[1]


def test_report_keeps_going_past_a_malformed_date():
    items = [
        Item(name="Cheese", expiry_date="99/99/9999", quantity=1),
        Item(name="Milk", expiry_date="01/01/2030", quantity=2),
    ]
    out = generate_report(items, datetime(2029, 12, 31))
    assert "Nome: Cheese\nData de Validade: 99/99/9999\nQuantidade: 1\nDias p/ vencer: unknown\n" in out
    assert "Nome: Milk" in out
    assert "Dias p/ vencer: 1\n" in out


def test_report_custom_placeholder():
    items = [Item(name="Eggs", expiry_date="amanha", quantity=12)]
    out = generate_report(items, datetime(2029, 12, 31), placeholder="?")
    assert out.endswith("Dias p/ vencer: ?\n")


def test_empty_collection_gives_empty_report():
    assert generate_report([], datetime(2029, 12, 31)) == ""


def test_report_survives_date_segment_too_long_to_convert():
    items = [
        Item(name="Milk", expiry_date="01/01/2030", quantity=2),
        Item(name="Odd", expiry_date="01/01/" + "9" * 5000, quantity=1),
        Item(name="Far", expiry_date="01/01/99999", quantity=1),
    ]
    out = generate_report(items, datetime(2029, 12, 31))
    blocks = out.split("\n\n")
    assert len(blocks) == 3
    assert blocks[0].endswith("Dias p/ vencer: 1\n")
    assert blocks[1].startswith("Nome: Odd")
    assert blocks[1].endswith("Dias p/ vencer: unknown\n")
    assert blocks[2].endswith("Dias p/ vencer: unknown\n")
