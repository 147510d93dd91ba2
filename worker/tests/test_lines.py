from city_resolver.core import lines


def test_is_contact_line_accepts_phone_numbers():
    assert lines.is_contact_line("0771234567")
    assert lines.is_contact_line("+94771234567")
    assert lines.is_contact_line("0771234567 0112345678")
    assert lines.is_contact_line("0771234567, 0112345678")
    assert lines.is_contact_line("0771234567 / 0719876543")


def test_is_contact_line_rejects_address_content():
    assert not lines.is_contact_line("Colombo 01")
    assert not lines.is_contact_line("123 Main Street")
    assert not lines.is_contact_line("077-123-4567")
    assert not lines.is_contact_line("077 1234567")
    assert not lines.is_contact_line("0771234567 Kandy")
    assert not lines.is_contact_line("1234567890123")
    assert not lines.is_contact_line("   ")


def test_classify_lines_strips_trailing_contact_line():
    content, reversed_content = lines.classify_lines("John Doe\n123 Main St\nColombo 01\n0771234567")
    assert content == ["John Doe", "123 Main St", "Colombo 01"]
    assert reversed_content[0] == "Colombo 01"
    assert reversed_content == ["Colombo 01", "123 Main St", "John Doe"]


def test_classify_lines_strips_several_contact_lines_and_blanks():
    address = "Jane\n\n45 Temple Rd\nKandy\n0771234567\n  \n0812345678, 0719876543\n"
    content, _ = lines.classify_lines(address)
    assert content == ["Jane", "45 Temple Rd", "Kandy"]


def test_classify_lines_never_empties_list():
    content, reversed_content = lines.classify_lines("0771234567")
    assert content == ["0771234567"]
    assert reversed_content == ["0771234567"]

    content, _ = lines.classify_lines("0771234567\n0719876543")
    assert content == ["0771234567"]


def test_classify_lines_keeps_contact_lines_above_content():
    content, _ = lines.classify_lines("0771234567\nNegombo")
    assert content == ["0771234567", "Negombo"]
