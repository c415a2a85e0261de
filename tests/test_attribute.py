import pytest
from polydoc import Document, Embedded, Attribute


class Account(Document):
    login = Attribute(indexed=True)
    secret = Attribute(accessors='reader')
    note = Attribute()


def test_unset_attribute_reads_none():
    assert Account().note is None

def test_attribute_write():
    account = Account(login='foo')
    account.note = 'bar'

    assert account.attributes == {'login': 'foo', 'note': 'bar'}

def test_reader_only_attribute():
    account = Account(secret='s3cret')

    assert account.secret == 's3cret'
    with pytest.raises(AttributeError):
        account.secret = 'other'

def test_invalid_accessors():
    with pytest.raises(ValueError):
        Attribute(accessors='writer')

def test_indexed_declaration():
    assert Account._indices == {'login'}
    assert set(Account._declared_attributes) == {'login', 'secret', 'note'}

def test_builder_declarations():
    class Badge(Document):
        pass

    Badge.attribute('level')
    Badge.attribute('code', indexed=True)
    Badge.index('level')

    assert Badge(level=3).level == 3
    assert Badge._indices == {'code', 'level'}

def test_index_of_undeclared_attribute():
    class Token(Document):
        pass

    with pytest.raises(AttributeError):
        Token.index('value')

def test_subclass_tables_are_separate():
    class Base(Embedded):
        name = Attribute()

    class Child(Base):
        age = Attribute()

    assert set(Base._declared_attributes) == {'name'}
    assert set(Child._declared_attributes) == {'name', 'age'}
    assert Child(name='foo', age=3).attributes == {'name': 'foo', 'age': 3}
