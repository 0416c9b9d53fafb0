from d42 import schema

from zeroconfig.helpers.labels import Label

LabelsSchema = schema.dict({
    Label.PROJECT: schema.str,
    Label.SERVICE: schema.str,
    Label.MANAGED: schema.str('true'),
    ...: ...,
})
