import logging

from . import registry


class FieldDescriptor(object):
    """Wrapper around field access of a Block related class.

    The field itself is shared by all the instances of the class, the value
    lives into the payload of the instance."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.logger = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        self.logger.debug("__get__ from %s for field named '%s'", instance.__class__.__name__, self.field.name)

        return self.field.get(instance)

    def __set__(self, instance, value):
        self.logger.debug("__set__ from %s for field named '%s'", instance.__class__.__name__, self.field.name)
        self.field.set(instance, value)


class FieldBase(object):

    def contribute_to_block(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        meta = cls._meta
        if meta.fields and meta.get_field(meta.fields[-1]).size is None:
            raise AttributeError(f'field {name} of class {cls.__name__} follows a variable sized field')

        self.offset = meta.size
        setattr(cls, name, FieldDescriptor(self, name))

        if self.size is not None:
            meta.size += self.size


class Meta(object):
    """Class containing metadata about the block layout"""

    def __init__(self):
        self.fields = []
        self.size = 0  # packed size of the fixed part of the payload
        self._by_name = {}

    def get_field(self, name):
        return self._by_name[name]

    def add_field(self, name, field):
        self.fields.append(name)
        self._by_name[name] = field


class MetaBlock(type):

    def __new__(cls, names, bases, attrs):
        '''Collect the fields in order of declaration, as Django does for its models.'''
        module = attrs.pop('__module__')
        classcell = attrs.pop('__classcell__', None)

        new_attrs = {
            '__module__': module,
        }
        if classcell is not None:
            new_attrs['__classcell__'] = classcell
        new_cls = super(MetaBlock, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()

        cls.logger = logging.getLogger(__name__)

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaBlock)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                new_cls.add_to_class(obj_name, parent._meta.get_field(obj_name))

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        # only the concrete block types have a tag
        if new_cls.__dict__.get('tag'):
            registry.register(new_cls)

        return new_cls

    def add_to_class(cls, name, value):
        if hasattr(value, 'contribute_to_block'):
            cls.logger.debug('contribute_to_block() found for field \'%s\'' % name)
            value.contribute_to_block(cls, name)
            cls._meta.add_field(name, value)
        else:
            setattr(cls, name, value)
