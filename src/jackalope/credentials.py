class SimpleCredentials:
    """ Plain user id and password credentials, with an optional set of
        named *attributes* that a transport may forward to the repository.
        The password is stored as given; nothing here attempts to protect
        it beyond not including it in :func:`repr`.
    """

    def __init__(self, user_id, password, attributes=None):

        self.user_id = user_id
        self.password = password
        self._attributes = dict()

        if attributes:
            self._attributes.update(attributes)


    def __repr__(self):
        return 'SimpleCredentials(%r)' % (self.user_id)


    def attribute_names(self):
        return tuple(self._attributes.keys())


    def get_attribute(self, name):
        return self._attributes.get(name)


    def remove_attribute(self, name):
        self._attributes.pop(name, None)


    def set_attribute(self, name, value):
        if value is None:
            self.remove_attribute(name)
        else:
            self._attributes[name] = value


    def to_dict(self):
        """ Return a JSON-friendly dictionary representation, suitable for
            transports that serialize the credentials onto the wire.
        """

        credentials = dict()
        credentials['user_id'] = self.user_id
        credentials['password'] = self.password
        credentials['attributes'] = dict(self._attributes)

        return credentials


# end of class SimpleCredentials


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
