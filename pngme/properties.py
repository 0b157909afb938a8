import logging


logger = logging.getLogger(__name__)


class Dependency:
    '''This makes the relation between fields possible.

    The relation is defined in one direction (usually for unpacking) and
    must be reversed during the packing phase!

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length'.

    The expression is resolved like a relative python module: the leading '.'
    indicates a field at the same level, every other component descends
    into a sub-chunk.
    '''
    def __init__(self, expression):
        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.length'.split(".") -> ['', 'length']

        if fields_path[0] != '':
            raise ValueError(f"'{self.expression}' is not a relative expression")

        field = instance.father
        if field is None:
            raise AttributeError(f"cannot resolve '{self.expression}' for a field without father")

        for component_name in fields_path[1:]:
            field = getattr(field, component_name)
            logger.debug(' resolved sub-component "%s" from "%s"' % (
                field.__class__.__name__, component_name))

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self.resolve_field(instance).value

    def resolve_and_set(self, instance, value):
        self.resolve_field(instance).value = value


class PropertyDescriptor(object):
    """This the glue for dependency management: the attribute can be a plain
    value or a Dependency, in the latter case reading and writing it goes
    through the field the Dependency points to."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type
        self.cache_name = f'_{name}_cache'  # the value when there is no father

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            if instance.father is None:
                return data.get(self.cache_name)

            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        data = instance.__dict__

        # the first time we add without thinking much
        if self.name not in data or not isinstance(data[self.name], Dependency):
            data[self.name] = value
            return

        if instance.father is None:
            data[self.cache_name] = value
            return

        data[self.name].resolve_and_set(instance, value)
